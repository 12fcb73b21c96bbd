"""Slash-delimited path helpers for page and media resources."""

MEDIA_PREFIX = "/media_"
VIDEOS_IDENTIFIER = "/videos/"
ROOT_PATH = "/content"


def get_parent(path: str) -> str:
    """Return everything before the last '/', or '' if there is none."""
    index = path.rfind("/")
    if index < 0:
        return ""
    return path[:index]


def get_name(path: str) -> str:
    return path[path.rfind("/") + 1:]


def get_parent_hierarchy(path: str) -> list[dict[str, str]]:
    """Build the ancestor chain of a page, ordered from the root down.

    Walks up from the parent of `path` until ROOT_PATH or an empty
    string is reached. Each item is {"title": <name>, "path": <ancestor>}.
    """
    hierarchy = []
    current = get_parent(path)

    while current not in (ROOT_PATH, ""):
        hierarchy.append({"title": get_name(current), "path": current})
        current = get_parent(current)

    hierarchy.reverse()
    return hierarchy


def is_media(path: str) -> bool:
    """Check if the resource is a media file hosted by the delivery service."""
    return MEDIA_PREFIX in path.strip()


def is_video_url(url: str) -> bool:
    return VIDEOS_IDENTIFIER in url.strip()


def get_media_hash(path: str) -> str:
    """Return the hash embedded in a media file name.

    Media names look like `media_<hash>.<ext>`, so the hash is whatever
    sits between the prefix and the next '.'. Only call this for paths
    where is_media() is true.
    """
    trimmed = path.strip()
    start = trimmed.find(MEDIA_PREFIX) + len(MEDIA_PREFIX)
    end = trimmed.find(".", start)
    if end < 0:
        return trimmed[start:]
    return trimmed[start:end]


def extract_media(path: str) -> str:
    """Strip any host or route prefix, keeping the path from the media prefix on."""
    trimmed = path.strip()
    return trimmed[trimmed.find(MEDIA_PREFIX):]
