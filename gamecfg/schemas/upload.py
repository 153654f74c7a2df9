"""Upload schemas"""

from .base import CamelModel


class UploadedImage(CamelModel):
    """Stored image reference"""

    url: str


class ImportedConfig(CamelModel):
    """Text content of an imported configuration file"""

    content: str
    file_name: str
