"""
Onboarding Step Migration

Maps step ids saved under an older step sequence to the equivalent step in
the current one. Each schema version bump adds a table to MIGRATIONS.
"""

from typing import Dict, Mapping

from dayflow_onboarding.wizard.exceptions import MigrationError


CURRENT_SCHEMA_VERSION = 1

# Unknown legacy ids land here
FALLBACK_STEP_ID = 0

# {from_version: {old_step_id: new_step_id}}
MIGRATIONS: Dict[int, Dict[int, int]] = {
    0: {
        0: 0,  # welcome
        1: 1,  # how it works
        2: 5,  # screen recording moved behind categories
        3: 2,  # llm selection
        4: 3,  # llm setup
        5: 4,  # categories
        6: 6,  # completion
    },
}


def migrate(
    stored_version: int,
    stored_step_id: int,
    tables: Mapping[int, Mapping[int, int]] = MIGRATIONS,
    current_version: int = CURRENT_SCHEMA_VERSION,
) -> int:
    """Translate a persisted step id to the current schema.

    Tables are applied one version at a time, oldest first. A version with no
    table, or an id missing from a table, resets to the first step.

    Args:
        stored_version: Schema version the id was written under
        stored_step_id: The persisted step id
        tables: Per-version step id tables
        current_version: Schema version of the running sequence

    Returns:
        A step id under ``current_version``
    """
    if stored_version >= current_version:
        return stored_step_id

    step_id = stored_step_id
    for version in range(max(stored_version, 0), current_version):
        table = tables.get(version)
        if table is None:
            return FALLBACK_STEP_ID
        step_id = table.get(step_id, FALLBACK_STEP_ID)
    return step_id


def validate_tables(
    tables: Mapping[int, Mapping[int, int]],
    current_version: int,
    sequence_length: int,
):
    """Check that every older version has a table and every target is a valid id.

    Raises:
        MigrationError: If a table is missing or maps outside the sequence
    """
    for version in range(current_version):
        table = tables.get(version)
        if table is None:
            raise MigrationError(
                f"No step table to migrate from schema version {version}",
                from_version=version
            )
        for old_id, new_id in table.items():
            if not 0 <= new_id < sequence_length:
                raise MigrationError(
                    f"Schema {version} maps step {old_id} to {new_id}, "
                    f"outside the current {sequence_length} steps",
                    from_version=version
                )
