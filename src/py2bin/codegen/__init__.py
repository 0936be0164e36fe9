from .escape import *
from .wrapper import *
