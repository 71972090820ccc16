# Released under MIT License.
# Copyright (c) 2026 The saferm Developers

"""
The `safe` command, removing paths using the safe profile.
"""
