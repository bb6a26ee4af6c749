import io
import unittest
from patched_artifacts.cli_logger import Logger

class TestLogger(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.logger = Logger(stream=self.stream)

    def test_messages_go_to_the_given_stream(self):
        self.logger.lifecycle("Forcing build from source.")
        self.assertIn("Forcing build from source.", self.stream.getvalue())

    def test_prefix_is_prepended_and_mirrored_to_log_file(self):
        self.logger.set_prefix("PatchedArtifacts")
        self.logger.warning("No Github CLI found.")
        self.assertIn("[PatchedArtifacts] No Github CLI found.", self.stream.getvalue())
        with open(self.logger.log_file) as f:
            self.assertIn("[WARNING] [PatchedArtifacts] No Github CLI found.", f.read())

if __name__ == '__main__':
    unittest.main()
