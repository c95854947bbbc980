# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Version of sony_monitor_remote"""

__version__ = "0.1.0"
