# -*- coding: utf-8 -*-
from . import models
from . import services

__version__ = '1.0.0'
