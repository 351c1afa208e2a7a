"""Case-convention migration pipeline.

tokenize -> classify -> resolve -> merge -> emit. The pipeline is pure: it
either returns the complete migrated schema or raises, never a partially
rewritten document.
"""

import logging
from enum import Enum

from prisma_case_format.core.classifier import classify_document
from prisma_case_format.core.emitter import emit
from prisma_case_format.core.merger import merge_block, rename_type_references
from prisma_case_format.core.resolver import (
    CaseChange,
    InflectionChange,
    require_transform,
    resolve,
    resolve_field_name,
    resolve_table_name,
)
from prisma_case_format.core.tokenizer import tokenize
from prisma_case_format.errors import SchemaParseError
from prisma_case_format.models import (
    Block,
    BlockKind,
    MigrationResult,
    RenamePlan,
    RenameRecord,
    RenameScope,
    SchemaDocument,
)

logger = logging.getLogger(__name__)


class MigrationStage(str, Enum):
    START = "start"
    TOKENIZED = "tokenized"
    CLASSIFIED = "classified"
    RESOLVED = "resolved"
    MERGED = "merged"
    EMITTED = "emitted"
    PARSE_ERROR = "parse-error"


_NAMESPACE_EXCLUDED = (BlockKind.DATASOURCE, BlockKind.GENERATOR)


def _unchanged(name: str) -> RenamePlan:
    return RenamePlan(original=name, new_name=name, changed=False)


def _resolve_document(
    document: SchemaDocument,
    table_case: CaseChange,
    field_case: CaseChange,
    table_inflection: InflectionChange,
) -> list[tuple[Block, RenamePlan, list[RenamePlan]]]:
    taken = {block.name for block in document.blocks if block.kind not in _NAMESPACE_EXCLUDED}
    plans: list[tuple[Block, RenamePlan, list[RenamePlan]]] = []

    for block in document.declarations():
        if block.kind is BlockKind.MODEL:
            block_plan = resolve_table_name(block.name, table_case, table_inflection)
            field_plans = [resolve_field_name(line.field_name or "", field_case) for line in block.field_lines()]
        else:
            # Enums are not tables: no inflection, and their values keep their spelling.
            block_plan = resolve(block.name, table_case)
            field_plans = [_unchanged(line.field_name or "") for line in block.field_lines()]

        if block_plan.changed:
            if block_plan.new_name in taken:
                logger.warning(
                    "Skipping %s %s (line %d): %s is already declared",
                    block.keyword,
                    block.name,
                    block.line_number,
                    block_plan.new_name,
                )
                block_plan = _unchanged(block.name)
            else:
                taken.discard(block_plan.original)
                taken.add(block_plan.new_name)

        plans.append((block, block_plan, field_plans))
    return plans


def run_migration(
    text: str,
    table_case: CaseChange,
    field_case: CaseChange,
    table_inflection: InflectionChange,
    rename_references: bool = False,
) -> MigrationResult:
    """Migrate ``text`` and report every rename that was applied."""
    require_transform(table_case, "table case")
    require_transform(field_case, "field case")
    require_transform(table_inflection, "table inflection")
    logger.debug("Migration stage: %s", MigrationStage.START.value)

    try:
        document = tokenize(text)
    except SchemaParseError:
        logger.debug("Migration stage: %s", MigrationStage.PARSE_ERROR.value)
        raise
    logger.debug("Migration stage: %s", MigrationStage.TOKENIZED.value)

    classify_document(document)
    logger.debug("Migration stage: %s", MigrationStage.CLASSIFIED.value)

    plans = _resolve_document(document, table_case, field_case, table_inflection)
    logger.debug("Migration stage: %s", MigrationStage.RESOLVED.value)

    records: list[RenameRecord] = []
    for block, block_plan, field_plans in plans:
        records.extend(merge_block(block, block_plan, field_plans))

    if rename_references:
        renamed = {r.original: r.new_name for r in records if r.scope is not RenameScope.FIELD}
        if renamed:
            for block in document.declarations():
                if block.kind is BlockKind.MODEL:
                    rename_type_references(block, renamed)
    logger.debug("Migration stage: %s", MigrationStage.MERGED.value)

    schema_text = emit(document)
    logger.debug("Migration stage: %s", MigrationStage.EMITTED.value)
    return MigrationResult(schema_text=schema_text, renames=records)


def migrate_case_conventions(
    text: str,
    table_case: CaseChange,
    field_case: CaseChange,
    table_inflection: InflectionChange,
    rename_references: bool = False,
) -> str:
    return run_migration(text, table_case, field_case, table_inflection, rename_references).schema_text
