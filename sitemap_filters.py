from fnmatch import fnmatchcase


def matches_any(path, patterns):
    if not path:
        return False
    return any(fnmatchcase(path, pattern) for pattern in patterns or [])


def is_excluded(path, exclude_patterns):
    """Is the page or post listed as something we want to exclude?"""
    return matches_any(path, exclude_patterns)


def is_index_like(path, include_patterns):
    """Should the page take the newest date of the site instead of its own?"""
    return matches_any(path, include_patterns)
