"""Unit tests for the LIKE patterns built from user search text."""

from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from flow.domain.value import ServiceId, TargetType
from flow.persistence.repository.service import PostgresServiceRepository
from flow.persistence.repository.target import PostgresTargetRepository
from flow.persistence.tables import services_table, targets_table


def compile_pg(stmt):
    return stmt.compile(dialect=postgresql.dialect())


class TestSearchEscaping:
    """Wildcard characters in a search must match themselves."""

    def test_target_search_escapes_wildcards(self):
        # Arrange
        conditions = PostgresTargetRepository._matching(
            ServiceId(uuid4()), TargetType.ISSUE, "100%_off"
        )

        # Act
        compiled = compile_pg(select(targets_table).where(*conditions))

        # Assert
        assert "ESCAPE '/'" in str(compiled)
        values = list(compiled.params.values())
        assert values.count("100/%/_off") == 2
        assert "100%_off" not in values

    def test_service_name_search_escapes_wildcards(self):
        compiled = compile_pg(
            select(services_table).where(
                PostgresServiceRepository._name_matches("a_b%")
            )
        )

        assert "ESCAPE '/'" in str(compiled)
        assert "a/_b/%" in compiled.params.values()

    def test_escape_character_itself_is_escaped(self):
        compiled = compile_pg(
            select(services_table).where(
                PostgresServiceRepository._name_matches("and/or")
            )
        )

        assert "and//or" in compiled.params.values()

    def test_plain_search_is_unchanged(self):
        compiled = compile_pg(
            select(services_table).where(PostgresServiceRepository._name_matches("acme"))
        )

        assert "acme" in compiled.params.values()
