"""Core SFZ parsing: value primitives, tokenizer, scope resolution and assembly."""
