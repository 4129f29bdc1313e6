"""Collect the host details shown next to the logo, one formatted line per metric."""

from __future__ import annotations

import ctypes
from dataclasses import dataclass
from functools import lru_cache
import getpass
import logging
import os
import platform
import socket
import subprocess
import sys
import time
from typing import Any, List, Optional, Tuple

import psutil

from .formatting import format_duration, format_gb

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"
NOT_DETECTED = "Not detected"

HORZRES = 8
VERTRES = 10

WINDOWS_VERSION_KEY = r"SOFTWARE\Microsoft\Windows NT\CurrentVersion"
WINDOWS_CPU_KEY = r"HARDWARE\DESCRIPTION\System\CentralProcessor\0"

WINDOWS_GPU_COMMAND = [
    "powershell",
    "-NoProfile",
    "-Command",
    "Get-CimInstance Win32_VideoController | Select-Object -ExpandProperty Name",
]
LSPCI_COMMAND = ["lspci"]
SYSCTL_CPU_COMMAND = ["sysctl", "-n", "machdep.cpu.brand_string"]
LSPCI_GPU_CLASSES = ("VGA", "3D", "Display")


@dataclass(frozen=True)
class DisplayLibrary:
    """Handles to the Windows libraries needed to read the primary screen size."""

    user32: Any
    gdi32: Any

    def screen_size(self) -> Optional[Tuple[int, int]]:
        hdc = self.user32.GetDC(0)
        if not hdc:
            return None
        try:
            width = self.gdi32.GetDeviceCaps(hdc, HORZRES)
            height = self.gdi32.GetDeviceCaps(hdc, VERTRES)
        finally:
            self.user32.ReleaseDC(0, hdc)
        return int(width), int(height)


@lru_cache(maxsize=None)
def load_display_library() -> Optional[DisplayLibrary]:
    """Load user32/gdi32 once per process; ``None`` where they do not exist."""
    win_dll = getattr(ctypes, "WinDLL", None)
    if win_dll is None:
        return None
    from ctypes import wintypes

    try:
        user32 = win_dll("user32")
        gdi32 = win_dll("gdi32")
    except OSError as exc:
        logger.debug("Display libraries unavailable: %s", exc)
        return None
    # HDC is pointer sized
    user32.GetDC.argtypes = [wintypes.HWND]
    user32.GetDC.restype = wintypes.HDC
    user32.ReleaseDC.argtypes = [wintypes.HWND, wintypes.HDC]
    user32.ReleaseDC.restype = ctypes.c_int
    gdi32.GetDeviceCaps.argtypes = [wintypes.HDC, ctypes.c_int]
    gdi32.GetDeviceCaps.restype = ctypes.c_int
    return DisplayLibrary(user32=user32, gdi32=gdi32)


def gather_info() -> List[str]:
    """Run every collector once, in display order."""
    user = get_user_name()
    return [
        user,
        "-" * len(user),
        get_os_info(),
        get_host_name(),
        get_resolution_info(),
        get_cpu_info(),
        get_gpu_info(),
        get_memory_info(),
        get_disk_info(),
        get_uptime(),
    ]


def get_user_name() -> str:
    try:
        name = getpass.getuser()
    except (OSError, KeyError, ImportError) as exc:
        logger.debug("User lookup failed: %s", exc)
        return f"User: {NOT_AVAILABLE}"
    # DOMAIN\user on Windows
    name = name.rsplit("\\", 1)[-1]
    return f"User: {name}"


def get_os_info() -> str:
    try:
        product, build = _read_os_version()
    except OSError as exc:
        logger.debug("OS version lookup failed: %s", exc)
        return f"OS: {NOT_AVAILABLE}"
    return f"OS: {product} (Build {build})"


def get_host_name() -> str:
    try:
        hostname = socket.gethostname()
    except OSError as exc:
        logger.debug("Hostname lookup failed: %s", exc)
        return f"Host: {NOT_AVAILABLE}"
    if not hostname:
        return f"Host: {NOT_AVAILABLE}"
    return f"Host: {hostname}"


def get_resolution_info(display: Optional[DisplayLibrary] = None) -> str:
    if display is None:
        display = load_display_library()
    if display is None:
        return f"Resolution: {NOT_AVAILABLE}"
    try:
        size = display.screen_size()
    except OSError as exc:
        logger.debug("Resolution query failed: %s", exc)
        return f"Resolution: {NOT_AVAILABLE}"
    if size is None:
        return f"Resolution: {NOT_AVAILABLE}"
    width, height = size
    return f"Resolution: {width}x{height}"


def get_cpu_info() -> str:
    try:
        model = _read_cpu_model()
        cores = psutil.cpu_count(logical=True)
    except (OSError, ValueError, subprocess.CalledProcessError, psutil.Error) as exc:
        logger.debug("CPU query failed: %s", exc)
        return f"CPU: {NOT_AVAILABLE}"
    if not model or not cores:
        return f"CPU: {NOT_AVAILABLE}"
    return f"CPU: {model} ({cores} cores)"


def get_gpu_info() -> str:
    try:
        names = _query_gpu_names()
    except (OSError, ValueError, subprocess.CalledProcessError) as exc:
        logger.debug("GPU query failed: %s", exc)
        return f"GPU: {NOT_AVAILABLE}"
    names = [name for name in names if name]
    if not names:
        return f"GPU: {NOT_DETECTED}"
    return f"GPU: {', '.join(names)}"


def get_memory_info() -> str:
    try:
        memory = psutil.virtual_memory()
    except (OSError, psutil.Error) as exc:
        logger.debug("Memory query failed: %s", exc)
        return f"Memory: {NOT_AVAILABLE}"
    return f"Memory: {format_gb(memory.used)}GB / {format_gb(memory.total)}GB"


def get_disk_info() -> str:
    volume = system_volume()
    try:
        usage = psutil.disk_usage(_volume_root(volume))
    except (OSError, psutil.Error) as exc:
        logger.debug("Disk query for %s failed: %s", volume, exc)
        return f"Disk ({volume}): {NOT_AVAILABLE}"
    return f"Disk ({volume}): {format_gb(usage.used)}GB / {format_gb(usage.total)}GB"


def get_uptime() -> str:
    try:
        boot_time = psutil.boot_time()
    except (OSError, psutil.Error) as exc:
        logger.debug("Uptime query failed: %s", exc)
        return f"Uptime: {NOT_AVAILABLE}"
    return f"Uptime: {format_duration(int(time.time() - boot_time))}"


def system_volume() -> str:
    if sys.platform == "win32":
        return os.environ.get("SystemDrive", "C:")
    return "/"


def _volume_root(volume: str) -> str:
    if volume.endswith(":"):
        return volume + "\\"
    return volume


def _read_os_version() -> Tuple[str, str]:
    if sys.platform == "win32":
        import winreg

        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, WINDOWS_VERSION_KEY) as key:
            product, _ = winreg.QueryValueEx(key, "ProductName")
            build, _ = winreg.QueryValueEx(key, "CurrentBuildNumber")
        return str(product), str(build)
    product = f"{platform.system()} {platform.release()}".strip()
    if not product:
        raise OSError("platform did not report a system name")
    return product, platform.version()


def _read_cpu_model() -> str:
    if sys.platform == "win32":
        import winreg

        with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, WINDOWS_CPU_KEY) as key:
            name, _ = winreg.QueryValueEx(key, "ProcessorNameString")
        return str(name).strip()
    if sys.platform.startswith("linux"):
        with open("/proc/cpuinfo", encoding="utf-8", errors="replace") as handle:
            model = _parse_cpuinfo_model(handle.read())
        if model:
            return model
    if sys.platform == "darwin":
        return _read_darwin_cpu_model()
    return platform.processor().strip()


def _read_darwin_cpu_model() -> str:
    result = subprocess.run(SYSCTL_CPU_COMMAND, capture_output=True, text=True, errors="replace", check=True)
    return result.stdout.strip()


def _parse_cpuinfo_model(text: str) -> str:
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == "model name":
            return value.strip()
    return ""


def _query_gpu_names() -> List[str]:
    command = WINDOWS_GPU_COMMAND if sys.platform == "win32" else LSPCI_COMMAND
    result = subprocess.run(command, capture_output=True, text=True, errors="replace", check=True)
    if sys.platform == "win32":
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]
    return _parse_lspci_gpus(result.stdout)


def _parse_lspci_gpus(text: str) -> List[str]:
    names: List[str] = []
    for line in text.splitlines():
        if not any(kind in line for kind in LSPCI_GPU_CLASSES):
            continue
        # "00:02.0 VGA compatible controller: Intel Corporation ..."
        _, sep, name = line.partition(": ")
        if sep:
            names.append(name.strip())
    return names
