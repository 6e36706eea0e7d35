from __future__ import annotations
import sys, platform, datetime

from hylo_intgen import __version__ as app_ver, __dev__ as is_dev

def _ensure_utf8_stdout() -> None:
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is None or (sys.stdout.encoding or "").lower() in ("utf-8", "utf8"):
        return
    try:
        reconfigure(encoding="utf-8")  # py3.7+
    except (ValueError, OSError):
        pass

def _get_versions() -> dict[str, str]:
    import llvmlite
    from llvmlite import binding as llvm

    llvm_lib_ver = ".".join(map(str, (getattr(llvm, "llvm_version_info", None) or ()))) or "unknown"

    return {
        "app": app_ver,
        "python": platform.python_version(),
        "llvmlite": getattr(llvmlite, "__version__", "unknown"),
        "llvm": llvm_lib_ver,
    }

def print_banner(stream=None) -> None:
    stream = stream or sys.stdout
    if stream is sys.stdout:
        _ensure_utf8_stdout()
    v = _get_versions()
    today = datetime.date.today().isoformat()

    # Only use ANSI styling on an interactive terminal
    use_ansi = getattr(stream, "isatty", lambda: False)()

    if use_ansi:
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    dev_marker = " (dev)" if is_dev else ""
    print(
        f"{BOLD}Hylo integer generator{RESET} • {v['app']}{dev_marker}\n"
        f"{DIM}Python {v['python']} • llvmlite {v['llvmlite']} • LLVM {v['llvm']} • {today}{RESET}\n",
        file=stream,
    )
