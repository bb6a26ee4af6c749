from .resolve import resolve
from .doctor import doctor
from .config import config
from .log import log
from .version import version
