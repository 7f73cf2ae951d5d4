#!/usr/bin/env python3
"""
Complete Pipeline Demo: script source → tokens → Script → execution → YAML

Shows the full workflow:
1. Parse the example strings script
2. Execute it, printing through the engine's print sink
3. Show a decode failure surfacing as a positioned error
4. Dump the parsed script as YAML
"""

from scriptstr.config import configure_logging
from scriptstr.engine import Engine
from scriptstr.errors import LexError
from scriptstr.examples import STRINGS_SCRIPT, build_example_script
from scriptstr.parser import parse_script
from scriptstr.serialization import script_to_yaml


def main():
    configure_logging()

    print("=" * 80)
    print("STRINGS DEMO: source → Script → execution → YAML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING SCRIPT...")
    script = build_example_script()
    print(f"   ✓ Statements: {len(script.statements)}")
    print(f"   ✓ Variables: {', '.join(script.variables())}")

    # =========================================================================
    # STEP 2: Execute
    # =========================================================================
    print("\n2. EXECUTING...")
    engine = Engine(on_print=lambda text: print(f"   > {text}"))
    result = engine.execute(script)
    print(f"   ✓ Printed {len(result.output)} lines")

    # =========================================================================
    # STEP 3: Decode failure
    # =========================================================================
    print("\n3. BAD ESCAPE...")
    try:
        parse_script(r'let bad = "surrogate: \uD800";')
    except LexError as err:
        print(f"   ✗ {err}")
        print(f"     caused by: {err.__cause__}")

    # =========================================================================
    # STEP 4: Serialize
    # =========================================================================
    print("\n4. YAML...")
    print(script_to_yaml(script))

    print("=" * 80)
    print("Source:")
    print(STRINGS_SCRIPT)


if __name__ == "__main__":
    main()
