# -*- coding: utf-8 -*-
from .writer import Writer
