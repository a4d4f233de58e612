"""Testes unitários para a geração de identificadores."""

from types import SimpleNamespace

from clubsheets.tables.ids import MEMBER_NUMBER_FIELD, max_id, next_id


def _entities(field, *values):
    return [SimpleNamespace(**{field: value}) for value in values]


class TestNextId:
    """Testes para next_id."""

    def test_member_number_is_max_plus_one_padded(self):
        """Número de sócio: maior + 1, com seis dígitos."""
        entities = _entities(MEMBER_NUMBER_FIELD, "000003", "000007")
        assert next_id(entities, MEMBER_NUMBER_FIELD) == "000008"

    def test_member_number_ignores_gaps(self):
        """Buracos na sequência não são reaproveitados."""
        entities = _entities(MEMBER_NUMBER_FIELD, "000001", "000005")
        assert next_id(entities, MEMBER_NUMBER_FIELD) == "000006"

    def test_simple_id_compares_numerically(self):
        """Ids simples comparam como inteiros, não como texto."""
        assert next_id(_entities("id", "1", "2", "9"), "id") == "10"

    def test_empty_table(self):
        """Aba vazia começa em 1."""
        assert next_id([], "id") == "1"
        assert next_id([], MEMBER_NUMBER_FIELD) == "000001"

    def test_non_numeric_ids_count_as_zero(self):
        """Ids não numéricos ou ausentes são tratados como 0."""
        assert max_id(_entities("id", "abc", None, "", "4"), "id") == 4
        assert next_id(_entities("id", "abc"), "id") == "1"
