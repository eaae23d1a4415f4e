"""bvgraph: dependency-graph analytics for issue trackers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bvgraph")
except PackageNotFoundError:
    __version__ = "dev"
