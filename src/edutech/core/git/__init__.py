"""Git operations subpackage.

Abstractions over the few git commands the lifecycle engine needs, with a
fake for tests.
"""

from edutech.core.git.abc import Git
from edutech.core.git.real import RealGit

__all__ = ["Git", "RealGit"]
