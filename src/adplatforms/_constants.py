"""Internal constants shared across the library."""

#: Separates the platform name from its location list.
PLATFORM_SEPARATOR = ":"
#: Separates locations inside the location list.
LOCATION_SEPARATOR = ","
#: Hierarchy separator inside a location path.
PATH_SEPARATOR = "/"

API_PREFIX = "/api/advertising-platforms"
UPLOAD_FIELD = "file"

DEFAULT_ALLOWED_CONTENT_TYPES: tuple[str, ...] = ("text/plain",)
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

UTF8_BOM = "\ufeff"
