"""MIME境界文脈のインフラストラクチャ層."""

from .magic_sniffer import *
from .table_loader import *
