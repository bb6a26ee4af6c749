import os
import json
import shutil
import tempfile
import toml
import unittest
from click.testing import CliRunner
from patched_artifacts import config
from patched_artifacts.commands.config import config as config_command

class TestConfig(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.test_dir, config.CONFIG_FILE)
        self.sample_config = {
            "patched_artifacts": {
                "package_name": "react-native",
            }
        }
        config.save_config(self.sample_config, path=self.test_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def write_gradle_properties(self, content):
        with open(os.path.join(self.test_dir, config.GRADLE_PROPERTIES_FILE), "w") as f:
            f.write(content)

    def test_load_config_not_found(self):
        """A project without any configuration gets the defaults."""
        os.remove(self.config_path)
        cfg = config.load_config(path=self.test_dir)
        self.assertEqual(cfg, {"patched_artifacts": {"force_build_from_source": False}})

    def test_save_and_load_config(self):
        self.assertTrue(os.path.exists(self.config_path))
        with open(self.config_path, "r") as f:
            self.assertEqual(toml.load(f), self.sample_config)
        loaded = config.load_config(path=self.test_dir)
        self.assertEqual(loaded["patched_artifacts"]["package_name"], "react-native")
        self.assertFalse(loaded["patched_artifacts"]["force_build_from_source"])

    def test_gradle_properties_override_toml(self):
        self.write_gradle_properties(
            "# comment\n"
            "org.gradle.jvmargs=-Xmx4g\n"
            "patchedArtifacts.packageName=hybrid-app\n"
            "patchedArtifacts.forceBuildFromSource = true\n"
            "newDotRoot=../..\n"
        )
        settings = config.load_config(path=self.test_dir)["patched_artifacts"]
        self.assertEqual(settings["package_name"], "hybrid-app")
        self.assertTrue(settings["force_build_from_source"])
        self.assertEqual(settings["new_dot_root"], "../..")

    def test_section_that_is_not_a_table_is_ignored(self):
        with open(self.config_path, "w") as f:
            f.write('patched_artifacts = "react-native"\n')
        self.write_gradle_properties("patchedArtifacts.packageName=hybrid-app\n")
        settings = config.load_config(path=self.test_dir)["patched_artifacts"]
        self.assertEqual(settings, {"package_name": "hybrid-app", "force_build_from_source": False})

    def test_force_flag_other_than_true_is_false(self):
        self.write_gradle_properties("patchedArtifacts.forceBuildFromSource=yes\n")
        settings = config.load_config(path=self.test_dir)["patched_artifacts"]
        self.assertFalse(settings["force_build_from_source"])

    def test_get_nested_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['get', 'patched_artifacts.package_name'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.strip(), 'react-native')

    def test_set_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['set', 'patched_artifacts.force_build_from_source', 'true'],
                               obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertTrue(config.load_config(path=self.test_dir)["patched_artifacts"]["force_build_from_source"])

    def test_unset_value(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['unset', 'patched_artifacts.package_name'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertNotIn('package_name', config.load_file_config(path=self.test_dir)['patched_artifacts'])

    def test_list_config(self):
        runner = CliRunner()
        result = runner.invoke(config_command, ['list'], obj={"path": self.test_dir})
        self.assertEqual(result.exit_code, 0)
        self.assertEqual(json.loads(result.output)["patched_artifacts"]["package_name"], "react-native")

if __name__ == "__main__":
    unittest.main()
