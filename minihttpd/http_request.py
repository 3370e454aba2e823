from dataclasses import dataclass, field


@dataclass
class HTTPRequest:
    method: str
    path: str
    version: str = "HTTP/1.1"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    raw: bytes = field(default=b"", repr=False)

    def get_header(self, name: str, default: str | None = None) -> str | None:
        """Look up a header by its exact, case-sensitive name (first occurrence wins)."""
        return self.headers.get(name, default)
