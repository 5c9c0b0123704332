"""Resources of a content management API, built on resourceful"""
from .resources import *  # noqa
