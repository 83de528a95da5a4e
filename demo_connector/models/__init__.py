# -*- coding: utf-8 -*-
from .outcome import Success, Failed, DeleteSucceeded, SyncOutcome
from .channel import Meta, Channel, ChannelVariant, ChannelImage, ChannelProduct
from .demo_product import DemoOption, DemoImage, DemoProduct
from .log import LogLevel, LogEvent
