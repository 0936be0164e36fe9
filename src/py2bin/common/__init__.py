from .config import *
from .enum import *
from .errors import *
from .records import *
from .utils import *
