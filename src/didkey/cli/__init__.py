# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""didkey CLI - did:key parsing and resolution from the shell."""

from .main import app, main

__all__ = ["main", "app"]
