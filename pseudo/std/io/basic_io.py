import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TextIO
from pseudo.errors import Position, fail

MODES = ('READ', 'WRITE', 'APPEND', 'RANDOM')


@dataclass
class XFile:
    """An open file. READ and RANDOM files keep their lines in `content`."""
    mode: str
    handle: Optional[TextIO] = None
    content: List[str] = field(default_factory=list)
    cursor: int = 1


class BasicIO:
    """Owns every file opened by a program, keyed by file name."""
    def __init__(self):
        self.open_files: Dict[str, XFile] = {}

    def is_open(self, filename: str) -> bool:
        return filename in self.open_files

    def _get(self, filename: str, pos: Optional[Position], *modes: str) -> XFile:
        xfile = self.open_files.get(filename)
        if xfile is None:
            raise fail('FileNotOpen', f'file {filename} is not open', pos)
        if modes and xfile.mode not in modes:
            raise fail('FileModeMismatch',
                       f'file {filename} is open for {xfile.mode}, not {" or ".join(modes)}', pos)
        return xfile

    def open_file(self, filename: str, mode: str, pos: Optional[Position] = None):
        if filename in self.open_files:
            raise fail('FileAlreadyOpen', f'file {filename} is already open', pos)
        if mode not in MODES:
            raise fail('InvalidOperation', f'unknown file mode {mode}', pos)
        try:
            if mode == 'WRITE':
                xfile = XFile(mode, open(filename, 'w', encoding='utf-8'))
            elif mode == 'APPEND':
                xfile = XFile(mode, open(filename, 'a', encoding='utf-8'))
            else:
                content: List[str] = []
                if mode == 'READ' or os.path.exists(filename):
                    with open(filename, 'r', encoding='utf-8') as f:
                        content = f.read().splitlines()
                xfile = XFile(mode, None, content)
        except FileNotFoundError:
            raise fail('FileNotFound', f'file {filename} does not exist', pos)
        except PermissionError:
            raise fail('IOError', f'permission denied opening {filename}', pos)
        except UnicodeDecodeError:
            raise fail('IOError', f'{filename} is not a UTF-8 text file', pos)
        except OSError as e:
            raise fail('IOError', f'error opening {filename}: {e.strerror}', pos)
        self.open_files[filename] = xfile

    def close_file(self, filename: str, pos: Optional[Position] = None):
        xfile = self._get(filename, pos)
        del self.open_files[filename]
        self._release(filename, xfile, pos)

    def close_all(self):
        while self.open_files:
            filename, xfile = self.open_files.popitem()
            self._release(filename, xfile, None)

    def _release(self, filename: str, xfile: XFile, pos: Optional[Position]):
        try:
            if xfile.mode == 'RANDOM':
                with open(filename, 'w', encoding='utf-8') as f:
                    f.write(''.join(line + '\n' for line in xfile.content))
            if xfile.handle is not None:
                xfile.handle.close()
        except OSError as e:
            raise fail('IOError', f'error closing {filename}: {e.strerror}', pos)

    def read_line(self, filename: str, pos: Optional[Position] = None) -> str:
        xfile = self._get(filename, pos, 'READ')
        line = xfile.content[xfile.cursor - 1] if xfile.cursor <= len(xfile.content) else ''
        xfile.cursor += 1
        return line

    def write_line(self, filename: str, text: str, pos: Optional[Position] = None):
        xfile = self._get(filename, pos, 'WRITE', 'APPEND')
        try:
            xfile.handle.write(text + '\n')
            xfile.handle.flush()
        except OSError as e:
            raise fail('IOError', f'error writing {filename}: {e.strerror}', pos)

    def eof(self, filename: str, pos: Optional[Position] = None) -> bool:
        xfile = self._get(filename, pos, 'READ')
        return xfile.cursor > len(xfile.content)

    def seek(self, filename: str, position: int, pos: Optional[Position] = None):
        xfile = self._get(filename, pos, 'RANDOM')
        if position < 1:
            raise fail('InvalidArgument', f'seek position must be at least 1, got {position}', pos)
        xfile.cursor = position

    def get_record(self, filename: str, pos: Optional[Position] = None) -> Dict[str, Any]:
        xfile = self._get(filename, pos, 'RANDOM')
        if xfile.cursor > len(xfile.content) or not xfile.content[xfile.cursor - 1].strip():
            raise fail('InvalidRecord', f'line {xfile.cursor} of {filename} holds no record', pos)
        try:
            data = json.loads(xfile.content[xfile.cursor - 1])
        except json.JSONDecodeError as e:
            raise fail('InvalidRecord', f'line {xfile.cursor} of {filename} is not a record: {e.msg}', pos)
        if not isinstance(data, dict):
            raise fail('InvalidRecord', f'line {xfile.cursor} of {filename} is not a record', pos)
        return data

    def put_record(self, filename: str, data: Dict[str, Any], pos: Optional[Position] = None):
        xfile = self._get(filename, pos, 'RANDOM')
        while len(xfile.content) < xfile.cursor:
            xfile.content.append('')
        xfile.content[xfile.cursor - 1] = json.dumps(data, ensure_ascii=False)
