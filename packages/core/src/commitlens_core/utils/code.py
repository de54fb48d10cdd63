import fnmatch
import os

REVIEWABLE_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


def is_reviewable(file_name: str, extensions=REVIEWABLE_EXTENSIONS) -> bool:
    name = file_name.lower()
    return any(name.endswith(ext.lower()) for ext in extensions)


def is_excluded(filename: str, patterns: list[str]) -> bool:
    """Return True if filename matches any exclude pattern.

    Supports:
    - fnmatch globs on the full path: "src/generated/*.ts"
    - fnmatch globs on the basename: "*.min.js", "*.d.ts"
    - Directory names/prefixes: "vendor/", "__mocks__" (matches any file within that tree)
    """
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(filename.rsplit("/", 1)[-1], pattern):
            return True
        prefix = pattern.rstrip("/") + "/"
        if filename.startswith(prefix) or ("/" + prefix) in filename:
            return True
    return False


def read_source_file(path: str, cwd: str | None = None) -> str:
    """Read a staged file as text. Raises OSError if it cannot be read."""
    full_path = path if cwd is None else os.path.join(cwd, path)
    with open(full_path, encoding="utf-8", errors="replace") as f:
        return f.read()
