# SPDX-License-Identifier: Apache-2.0
"""Package version."""

__version__ = "0.1.0"
