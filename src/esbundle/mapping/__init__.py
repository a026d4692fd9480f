"""매핑 수집/병합/컴파일."""

from esbundle.mapping.collector import MetadataCollector
from esbundle.mapping.compiler import compile_index_body, compile_manager_metadata
from esbundle.mapping.merge import deep_merge, merge_all

__all__ = [
    "MetadataCollector",
    "compile_manager_metadata",
    "compile_index_body",
    "deep_merge",
    "merge_all",
]
