"""Generate JSON schemas for the wire and result models into schemas/."""

import json
from pathlib import Path

from solcbridge.contracts import CompileResult
from solcbridge.kernel.schema import CompilerInputDocument, RawCompilerOutput


SCHEMAS = {
    "compiler_input.schema.json": (CompilerInputDocument, "serialization"),
    "compiler_output.schema.json": (RawCompilerOutput, "validation"),
    "compile_result.schema.json": (CompileResult, "serialization"),
}


def generate_schemas():
    """Generate JSON schemas for all models."""
    schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    for filename, (model, mode) in SCHEMAS.items():
        schema = model.model_json_schema(by_alias=True, mode=mode)
        schema_path = schemas_dir / filename
        with open(schema_path, 'w', encoding='utf-8') as f:
            json.dump(schema, f, indent=2, ensure_ascii=False)
        print(f"Generated: {schema_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
