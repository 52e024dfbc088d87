#!/usr/bin/env python3
"""
Execution loop: dispatch, loops, I/O boundaries and fatal conditions.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfi import BufferSink, BytesSource, Instruction, Interpreter, OutOfBounds, parse

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def run_bf(code, input_data=b""):
    sink = BufferSink()
    interp = Interpreter(code, source=BytesSource(input_data), sink=sink)
    state = interp.run()
    return sink.getvalue(), interp, state


def test_hello_world():
    output, interp, state = run_bf(HELLO_WORLD)
    assert output == b"Hello World!\n"
    assert state.halted
    assert state.ip == len(interp.program)


def test_256_increments_wrap_to_zero():
    _, interp, _ = run_bf("+" * 256)
    assert interp.tape.read() == 0
    assert interp.tape.pointer == 0


def test_input_plus_one():
    output, _, _ = run_bf(",+.", b"A")
    assert output == b"B"
    assert output == bytes([66])


def test_exhausted_input_writes_zero():
    output, interp, _ = run_bf("+++++,.", b"")
    assert output == b"\x00"
    assert interp.tape.read() == 0


def test_input_reads_one_byte_per_command():
    output, _, _ = run_bf(",.,.,.", b"xy")
    assert output == b"xy\x00"


def test_move_left_first_is_out_of_bounds():
    sink = BufferSink()
    interp = Interpreter("<.", sink=sink)
    with pytest.raises(OutOfBounds) as exc:
        interp.run()
    assert exc.value.position == 0
    assert sink.getvalue() == b""


def test_output_before_error_is_kept():
    sink = BufferSink()
    interp = Interpreter("+.>+.<<.", sink=sink)
    with pytest.raises(OutOfBounds) as exc:
        interp.run()
    assert exc.value.position == 6
    assert sink.getvalue() == b"\x01\x01"


def test_clear_loop_on_nonzero_cell():
    _, interp, state = run_bf("+++++[-]")
    assert interp.tape.read() == 0
    # 5 increments, then 5 iterations of "-]" plus the entry test.
    assert state.steps == 5 + 1 + 5 * 2


def test_clear_loop_on_zero_cell_skips_body():
    _, interp, state = run_bf("[-]")
    assert interp.tape.read() == 0
    assert state.steps == 1


def test_skipped_loop_body_never_runs():
    output, _, _ = run_bf("[.+++.]+.")
    assert output == b"\x01"


def test_nested_loops_multiply():
    # 4 * 6 into cell 1
    _, interp, _ = run_bf("++++[>++++++<-]>")
    assert interp.tape.read() == 24


def test_moves_past_initial_allocation():
    sink = BufferSink()
    interp = Interpreter(">" * 40 + "+++.", sink=sink, tape_size=8)
    interp.run()
    assert interp.tape.pointer == 40
    assert sink.getvalue() == b"\x03"


def test_runs_are_independent():
    code = ",[.-]"
    first, _, _ = run_bf(code, b"\x05")
    second, _, _ = run_bf(code, b"\x05")
    assert first == second == b"\x05\x04\x03\x02\x01"


def test_step_by_step():
    interp = Interpreter("+>+")
    assert interp.step() is True
    assert interp.state.ip == 1
    assert interp.step() is True
    assert interp.step() is False
    assert interp.halted
    assert interp.step() is False
    assert interp.state.steps == 3


def test_empty_program_halts_immediately():
    output, _, state = run_bf("no commands here")
    assert output == b""
    assert state.halted
    assert state.steps == 0


def test_accepts_parsed_program():
    program = parse("+++.")
    sink = BufferSink()
    Interpreter(program, sink=sink).run()
    Interpreter(program, sink=sink).run()
    assert sink.getvalue() == b"\x03\x03"


def test_every_instruction_has_a_handler():
    interp = Interpreter("")
    assert set(interp._handlers) == set(Instruction)
