__version__ = "1.0.0"

from .decoder import NcmDumper, read_container
from .utils import iter_container_paths
