# -*- coding: utf-8 -*-
from .environment import Environment, LoaderArray, LoaderDotenv
