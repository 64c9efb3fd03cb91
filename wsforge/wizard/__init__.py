"""Create-workspace wizard: draft, derivation rules, step flow and payload assembly."""
