from .basic_io import BasicIO, XFile, MODES
from .records import record_to_json, fill_record

__all__ = ['BasicIO', 'XFile', 'MODES', 'record_to_json', 'fill_record']
