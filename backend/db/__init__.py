# Database utilities package
from .engine import warmup, dispose
from .session import store_operation
