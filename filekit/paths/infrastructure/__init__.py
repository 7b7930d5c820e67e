"""Paths境界文脈のインフラストラクチャ層."""

from .local import *
