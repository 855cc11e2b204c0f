#!/usr/bin/env python3
"""
Bitcoin Script Debugger Demo
============================

This script demonstrates how to use the SDK to:
1. Assemble a script and look at its export views
2. Inspect the line and program-counter tables
3. Set breakpoints and run the script on an execution engine
4. Step through the returned trace

The engine must be listening on BTCSCRIPT_ENGINE_URL (default
http://localhost:3000/run-job). Without it, steps 1-2 still run and the
connection failure is reported.

Usage:
    python examples/debug_demo.py
"""

from btcscript_sdk import EngineClient, EngineConfig, SessionState, Workspace


def main():
    # ==========================================================================
    # 1. Assemble
    # ==========================================================================
    ws = Workspace()
    ws.load_sample("p2pkh")

    print(f"ASM:    {' '.join(ws.asm.split())}")
    print(f"Hex:    {ws.hex}  ({ws.info})")
    print(f"Python: {ws.python}")
    print(f"C/C++:  {ws.cpp}")

    # ==========================================================================
    # 2. Offset tables
    # ==========================================================================
    # One line per token makes breakpoints per instruction
    ws.edit_asm("\n".join(ws.asm.split()))

    print("\nLine table:")
    for line, offset in enumerate(ws.offsets.line_table, start=1):
        print(f"  line {line}: byte {offset}")

    # ==========================================================================
    # 3. Run with a breakpoint on OP_EQUALVERIFY (line 4)
    # ==========================================================================
    ws.toggle_breakpoint(4)
    print(f"\nBreakpoint offsets: {ws.breakpoint_offsets()}")

    with EngineClient(EngineConfig.from_env()) as client:
        if not ws.step_forward(client):
            print(f"Run failed: {ws.info}")
            return

    # ==========================================================================
    # 4. Step through
    # ==========================================================================
    words = ws.asm.split()
    while True:
        view = ws.view()
        token = words[view.token_index] if view.token_index is not None else "?"
        print(f"step {view.step}: {token:<16} stack={view.stack_text.splitlines()}")
        if view.state is SessionState.TERMINAL:
            print(f"Finished: {view.terminal_status.value} {view.error_detail}")
            break
        ws.step_forward()


if __name__ == "__main__":
    main()
