import sys
from unittest.mock import Mock

sys.modules["uinput"] = Mock()
sys.modules["uinput"].Device = Mock()
sys.modules["uinput"].KEY_UP = "U_KEY_UP"
sys.modules["uinput"].KEY_ENTER = "U_KEY_ENTER"
