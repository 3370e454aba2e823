"""Map file extensions to MIME types."""

from minihttpd.http_constants import ContentType

DEFAULT_CONTENT_TYPE = ContentType.OCTET_STREAM.value

CONTENT_TYPES = {
    "bmp": "image/bmp",
    "css": "text/css",
    "csv": "text/csv",
    "gif": "image/gif",
    "htm": "text/html",
    "html": "text/html",
    "ico": "image/vnd.microsoft.icon",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "js": "text/javascript",
    "json": "application/json",
    "png": "image/png",
    "pdf": "application/pdf",
    "php": "application/x-httpd-php",
    "svg": "image/svg+xml",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "txt": ContentType.TEXT_PLAIN.value,
}


def get_file_extension(path: str) -> str:
    """
    Extension of the last path segment, lowercased.

    Only the final segment is inspected so that a dotted directory name
    ("v1.2/README") does not lend its suffix to an extensionless file.
    """
    file_name = path.rpartition("/")[2]
    _, dot, extension = file_name.rpartition(".")
    if not dot:
        return ""
    return extension.lower()


def content_type_for_extension(extension: str) -> str:
    return CONTENT_TYPES.get(extension.lower(), DEFAULT_CONTENT_TYPE)


def resolve_content_type(path: str) -> str:
    return content_type_for_extension(get_file_extension(path))
