"""Wrapper scripts that run a dependency's executable through ``node``."""

POSIX_NEWLINE = "\n"
WINDOWS_NEWLINE = "\r\n"


def to_windows_path(path: str) -> str:
    """Convert forward slashes to backslashes."""
    return path.replace("/", "\\")


def render_posix_script(relative_target: str) -> str:
    """Render the ``sh`` wrapper for a target relative to the wrapper's directory.

    The wrapper prefers a ``node`` binary sitting next to it and falls back to
    ``node`` on ``PATH``; it forwards all arguments and the child's exit code.
    """
    target = f'"$basedir/{relative_target}"'
    lines = [
        "#!/bin/sh",
        r"""basedir=$(dirname "$(echo "$0" | sed -e 's,\\,/,g')")""",
        "case `uname` in",
        '    *CYGWIN*|*MINGW*|*MSYS*) basedir=`cygpath -w "$basedir"`;;',
        "esac",
        'if [ -x "$basedir/node" ]; then',
        f'  "$basedir/node"  {target} "$@"',
        "  ret=$?",
        "else",
        f'  node  {target} "$@"',
        "  ret=$?",
        "fi",
        "exit $ret",
    ]
    return POSIX_NEWLINE.join(lines) + POSIX_NEWLINE


def render_windows_command(relative_target: str) -> str:
    """Render the ``.cmd`` wrapper used by Windows shells."""
    target = to_windows_path(relative_target)
    lines = [
        "@ECHO off",
        "SETLOCAL",
        "CALL :find_dp0",
        r'IF EXIST "%dp0%\node.exe" (',
        r'  SET "_prog=%dp0%\node.exe"',
        ") ELSE (",
        '  SET "_prog=node"',
        "  SET PATHEXT=%PATHEXT:;.JS;=;%",
        ")",
        '"%_prog%"  "%dp0%\\' + target + '" %*',
        "ENDLOCAL",
        "EXIT /b %errorlevel%",
        ":find_dp0",
        "SET dp0=%~dp0",
        "EXIT /b",
    ]
    return WINDOWS_NEWLINE.join(lines) + WINDOWS_NEWLINE
