from dataclasses import dataclass

from bucketshortener.constants import ObjectLayout, SHORT_URL_PATH


@dataclass(frozen=True)
class ShortURLModel:
    target: str  # Original long URL
    token: str   # Random identifier embedded in the short URL

    @property
    def key(self) -> str:
        """Name of the object holding this mapping."""
        return object_key(self.token)

    def short_url(self, origin: str) -> str:
        return f'{origin.rstrip("/")}{SHORT_URL_PATH}{self.token}'


def object_key(token: str) -> str:
    return f'{token}{ObjectLayout.SUFFIX}'
