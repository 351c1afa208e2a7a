"""Tests for the full case-convention migration."""

from __future__ import annotations

import logging
from typing import Any

import inflection
import pytest

from prisma_case_format.core.conventions import camel_case, leave, pascal_case, snake_case
from prisma_case_format.core.migrate import migrate_case_conventions, run_migration
from prisma_case_format.errors import ConfigurationError, ParseErrorKind, SchemaParseError
from prisma_case_format.models import RenameScope

BLOG_SCHEMA = """datasource db {
  provider = "postgresql"
  url      = env("DATABASE_URL")
}

/// A blog user
model users {
  user_id    Int      @id @default(autoincrement())
  email      String   @unique // login
  created_at DateTime @default(now())
  posts      posts[]

  @@index([email, created_at])
  @@unique([user_id, email])
}

model posts {
  post_id   Int    @id
  author_id Int    @map("writer_id")
  author    users  @relation(fields: [author_id], references: [user_id])
  status    post_status
}

enum post_status {
  DRAFT
  PUBLISHED @map("published")
}

type address_info {
  street_name String
}
"""


def test_it_can_map_table_names_and_column_names(
    demo_schema: str, migrated_demo_schema: str, pascal_singular: dict[str, Any]
) -> None:
    assert migrate_case_conventions(demo_schema, **pascal_singular) == migrated_demo_schema


def test_inline_model_scenario(pascal_singular: dict[str, Any]) -> None:
    result = migrate_case_conventions("model demos { article_id Int }", **pascal_singular)
    assert " ".join(result.split()) == 'model Demo { @@map("demos") articleId Int @map("article_id") }'


class TestProperties:
    def test_idempotent(self, pascal_singular: dict[str, Any]) -> None:
        once = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        twice = migrate_case_conventions(once, **pascal_singular)
        assert twice == once
        assert once.count('@@map("users")') == 1

    def test_already_mapped_model_is_unchanged(
        self, migrated_demo_schema: str, pascal_singular: dict[str, Any]
    ) -> None:
        assert migrate_case_conventions(migrated_demo_schema, **pascal_singular) == migrated_demo_schema

    def test_passthrough_fidelity(self, settings_schema: str, pascal_singular: dict[str, Any]) -> None:
        assert migrate_case_conventions(settings_schema, **pascal_singular) == settings_schema

    def test_identity_transforms_change_nothing(self, identity: dict[str, Any]) -> None:
        assert migrate_case_conventions(BLOG_SCHEMA, **identity) == BLOG_SCHEMA

    def test_existing_attributes_keep_order(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert '  userId    Int      @id @default(autoincrement()) @map("user_id")' in result
        assert '  email      String   @unique // login' in result
        assert "  @@index([email, created_at])\n  @@unique([user_id, email])" in result

    def test_mapping_annotations_carry_original_names(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert 'model User {\n  @@map("users")\n' in result
        assert 'model Post {\n  @@map("posts")\n' in result
        assert '  createdAt DateTime @default(now()) @map("created_at")' in result

    def test_existing_field_map_is_not_overwritten(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert '  authorId Int    @map("writer_id")' in result
        assert '@map("author_id")' not in result


class TestDeclarations:
    def test_enum_gets_case_and_map_but_values_stay(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert 'enum PostStatus {\n  @@map("post_status")\n  DRAFT\n  PUBLISHED @map("published")\n}' in result

    def test_enum_is_not_inflected(self) -> None:
        result = migrate_case_conventions("enum statuses {\n  A\n}\n", pascal_case, camel_case, inflection.singularize)
        assert result == 'enum Statuses {\n  @@map("statuses")\n  A\n}\n'

    def test_unknown_blocks_are_untouched(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert "type address_info {\n  street_name String\n}" in result

    def test_datasource_is_untouched(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert result.startswith(BLOG_SCHEMA[: BLOG_SCHEMA.index("/// A blog user")])

    def test_type_references_are_kept_by_default(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, **pascal_singular)
        assert "  author    users  @relation(fields: [author_id], references: [user_id])" in result

    def test_type_references_follow_renames_when_requested(self, pascal_singular: dict[str, Any]) -> None:
        result = migrate_case_conventions(BLOG_SCHEMA, rename_references=True, **pascal_singular)
        assert "  author    User  @relation(fields: [author_id], references: [user_id])" in result
        assert "  posts      Post[]" in result
        assert "  status    PostStatus" in result

    def test_model_collision_is_skipped(self, pascal_singular: dict[str, Any]) -> None:
        schema = "model Demo {\n  id Int\n}\n\nmodel demos {\n  id Int\n}\n"
        assert migrate_case_conventions(schema, **pascal_singular) == schema

    def test_model_collision_warning_names_the_line(
        self, pascal_singular: dict[str, Any], caplog: pytest.LogCaptureFixture
    ) -> None:
        schema = "model Demo {\n  id Int\n}\n\nmodel demos {\n  id Int\n}\n"
        with caplog.at_level(logging.WARNING, logger="prisma_case_format.core.migrate"):
            migrate_case_conventions(schema, **pascal_singular)
        assert "Skipping model demos (line 5): Demo is already declared" in caplog.text

    def test_snake_tables_plural(self) -> None:
        schema = "model UserProfile {\n  displayName String\n}\n"
        result = migrate_case_conventions(schema, snake_case, snake_case, inflection.pluralize)
        assert result == 'model user_profiles {\n  @@map("UserProfile")\n  display_name String @map("displayName")\n}\n'

    def test_crlf_line_endings(self, pascal_singular: dict[str, Any]) -> None:
        schema = "model demos {\r\n  article_id Int\r\n}\r\n"
        result = migrate_case_conventions(schema, **pascal_singular)
        assert result == 'model Demo {\r\n  @@map("demos")\r\n  articleId Int @map("article_id")\r\n}\r\n'

    def test_byte_order_mark_is_kept(self, pascal_singular: dict[str, Any]) -> None:
        schema = "\ufeffmodel demos {\n  article_id Int\n}\n"
        result = migrate_case_conventions(schema, **pascal_singular)
        assert result == '\ufeffmodel Demo {\n  @@map("demos")\n  articleId Int @map("article_id")\n}\n'

    def test_header_line_comment_is_untouched(self, pascal_singular: dict[str, Any]) -> None:
        schema = "model demos { // legacy\n  article_id Int\n}\n"
        result = migrate_case_conventions(schema, **pascal_singular)
        assert result == 'model Demo { // legacy\n  @@map("demos")\n  articleId Int @map("article_id")\n}\n'


class TestRunMigration:
    def test_reports_renames(self, demo_schema: str, pascal_singular: dict[str, Any]) -> None:
        result = run_migration(demo_schema, **pascal_singular)
        assert [(r.scope, r.block, r.original, r.new_name, r.mapped) for r in result.renames] == [
            (RenameScope.MODEL, "Demo", "demos", "Demo", True),
            (RenameScope.FIELD, "Demo", "article_id", "articleId", True),
        ]

    def test_no_renames_for_migrated_schema(self, migrated_demo_schema: str, pascal_singular: dict[str, Any]) -> None:
        assert run_migration(migrated_demo_schema, **pascal_singular).renames == []


class TestErrors:
    def test_parse_error_aborts(self, pascal_singular: dict[str, Any]) -> None:
        with pytest.raises(SchemaParseError) as excinfo:
            migrate_case_conventions("model demos {\n  article_id Int\n", **pascal_singular)
        assert excinfo.value.kind is ParseErrorKind.UNTERMINATED_BLOCK

    @pytest.mark.parametrize("missing", ["table_case", "field_case", "table_inflection"])
    def test_missing_transform(self, missing: str, identity: dict[str, Any]) -> None:
        kwargs = {**identity, missing: None}
        with pytest.raises(ConfigurationError):
            migrate_case_conventions("model a {\n  id Int\n}\n", **kwargs)

    def test_missing_transform_is_rejected_even_without_models(self, identity: dict[str, Any]) -> None:
        with pytest.raises(ConfigurationError):
            migrate_case_conventions("", **{**identity, "field_case": None})

    def test_leave_is_identity(self) -> None:
        assert leave("demos") == "demos"
