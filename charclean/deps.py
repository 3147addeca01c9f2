"""
必要パッケージの確認とインストール。

教材を開く前に pandas / matplotlib などが import できるかを確かめ、
足りないものだけ `python -m pip install` で入れてから読み込む。
失敗したら PackageInstallError をそのまま呼び出し元へ投げる（リトライなし）。
"""

from __future__ import annotations

import importlib
import importlib.util
import subprocess
import sys
from collections.abc import Callable, Iterable, Mapping
from types import ModuleType


# import名 -> pip で入れるときの配布名
REQUIRED_PACKAGES: dict[str, str] = {
    "pandas": "pandas",
    "numpy": "numpy",
    "matplotlib": "matplotlib",
}


class PackageInstallError(RuntimeError):
    """必要パッケージを入れられなかった / 読み込めなかった。"""


def is_installed(import_name: str) -> bool:
    return importlib.util.find_spec(import_name) is not None


def install(dist_name: str, runner: Callable = subprocess.run) -> None:
    print(f"Installing {dist_name} ...")
    try:
        runner(
            [sys.executable, "-m", "pip", "install", dist_name],
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip()
        raise PackageInstallError(f"pip install {dist_name} failed: {detail or e}") from e
    importlib.invalidate_caches()


def ensure_packages(
    packages: Mapping[str, str] | Iterable[str] = REQUIRED_PACKAGES,
    install_missing: bool = True,
    runner: Callable = subprocess.run,
) -> dict[str, ModuleType]:
    if not isinstance(packages, Mapping):
        packages = {name: name for name in packages}

    loaded: dict[str, ModuleType] = {}
    for import_name, dist_name in packages.items():
        if not is_installed(import_name):
            if not install_missing:
                raise PackageInstallError(
                    f"{import_name} is not installed. Install with: pip install {dist_name}"
                )
            install(dist_name, runner=runner)
        try:
            loaded[import_name] = importlib.import_module(import_name)
        except ImportError as e:
            raise PackageInstallError(f"cannot import {import_name}: {e}") from e
    return loaded
