from edutech.core.package_manager.abc import PackageManager
from edutech.core.package_manager.real import RealPackageManager

__all__ = ["PackageManager", "RealPackageManager"]
