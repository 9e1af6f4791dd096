from tipplot.backends.raster import RasterBackend
from tipplot.backends.recording import BackendEvent, RecordingBackend

__all__ = ["BackendEvent", "RasterBackend", "RecordingBackend"]
