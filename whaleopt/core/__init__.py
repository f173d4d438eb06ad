"""Core package for all Whaleopt foundational modules."""

from whaleopt.core.device import DeviceManager
from whaleopt.core.function import Function
from whaleopt.core.optimizer import Optimizer, UpdateContext
from whaleopt.core.population import Population
from whaleopt.core.whale import Whale
