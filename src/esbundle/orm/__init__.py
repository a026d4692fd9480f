"""Manager / Repository / 메타데이터 컬렉션."""

from esbundle.orm.manager import Manager
from esbundle.orm.metadata import ClassMetadataCollection
from esbundle.orm.repository import Repository

__all__ = [
    "ClassMetadataCollection",
    "Manager",
    "Repository",
]
