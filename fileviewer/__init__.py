"""fileviewer - A scrollable, line-numbered text viewer component."""

from .document import Document, load_document
from .errors import DocumentLoadError, FileViewerError, LineIndexError, UnsupportedEventError
from .render import RenderHooks, RenderPipeline, prepare_line
from .style import Color, Style
from .surface import BufferSurface, DisplaySurface
from .viewer import FileViewer
from .viewport import ViewportController, ViewportState

__all__ = [
    'BufferSurface',
    'Color',
    'DisplaySurface',
    'Document',
    'DocumentLoadError',
    'FileViewer',
    'FileViewerError',
    'LineIndexError',
    'RenderHooks',
    'RenderPipeline',
    'Style',
    'UnsupportedEventError',
    'ViewportController',
    'ViewportState',
    'load_document',
    'prepare_line',
]
