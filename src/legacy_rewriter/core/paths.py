import posixpath
import re
from pathlib import PurePath

_MODULE_EXTENSION = re.compile(r"\.(d\.ts|ts|[cm]?js)$")


def to_posix(path: str) -> str:
    return PurePath(path.replace("\\", "/")).as_posix()


def strip_extension(path: str) -> str:
    return _MODULE_EXTENSION.sub("", path)


def is_same_module(path_a: str, path_b: str) -> bool:
    return strip_extension(to_posix(path_a)) == strip_extension(to_posix(path_b))


def relative_module_specifier(from_path: str, to_path: str) -> str:
    """Return a POSIX module specifier for ``to_path`` as seen from the module at ``from_path``.

    The extension is stripped and siblings or descendants get a ``./`` prefix,
    e.g. ``/some/file.js`` -> ``/some/foo/b.js`` gives ``./foo/b``.
    """
    target = strip_extension(to_posix(to_path))
    relative = posixpath.relpath(target, posixpath.dirname(to_posix(from_path)))
    if relative == ".." or relative.startswith("../"):
        return relative
    return f"./{relative}"
