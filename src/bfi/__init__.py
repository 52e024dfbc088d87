
from .api import RunOptions, RunResult, execute, run_file, run_string
from .errors import BFIError, OutOfBounds, StepLimitExceeded, UnbalancedBrackets
from .interpreter import Interpreter
from .lexer import Instruction, Program, Token, build_jump_table, parse, tokenize
from .state import ExecutionState
from .streams import BufferSink, ByteSink, ByteSource, BytesSource, StreamSink, StreamSource
from .tape import Tape

__all__ = [
    'Interpreter',
    'Tape',
    'Instruction',
    'Program',
    'Token',
    'tokenize',
    'build_jump_table',
    'parse',
    'ExecutionState',
    'ByteSource',
    'ByteSink',
    'BytesSource',
    'StreamSource',
    'BufferSink',
    'StreamSink',
    'BFIError',
    'UnbalancedBrackets',
    'OutOfBounds',
    'StepLimitExceeded',
    'RunOptions',
    'RunResult',
    'execute',
    'run_string',
    'run_file',
]
