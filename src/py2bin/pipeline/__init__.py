from .interpreter import *
from .compiler import *
from .converter import *
