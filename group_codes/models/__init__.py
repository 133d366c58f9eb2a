from .code import *
from .error import *
