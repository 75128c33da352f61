import pytest

from openapi_to_ts.errors import ErrorKind, OutputValidationError
from openapi_to_ts.pipeline.atomic_writer import AtomicWriter

VALID = "export interface Pet {\n  'name': string;\n}\n"


class TestAtomicWriter:
    def test_write_creates_parent_directories(self, tmp_path):
        path = tmp_path / "out" / "nested" / "v2.ts"
        AtomicWriter().write(path, VALID)
        assert path.read_text() == VALID

    def test_write_replaces_existing(self, tmp_path):
        path = tmp_path / "v2.ts"
        path.write_text("old")
        AtomicWriter().write(path, VALID)
        assert path.read_text() == VALID

    @pytest.mark.parametrize(
        "content",
        [
            "interface Pet {}",
            "export interface Pet {",
            "export type A = string; }",
        ],
    )
    def test_invalid_content_is_not_written(self, tmp_path, content):
        path = tmp_path / "v2.ts"
        path.write_text("old")

        with pytest.raises(OutputValidationError) as exc_info:
            AtomicWriter().write(path, content)

        assert exc_info.value.kind == ErrorKind.INVALID_OUTPUT
        assert path.read_text() == "old"
        assert list(tmp_path.iterdir()) == [path]

    def test_validation_can_be_skipped(self, tmp_path):
        path = tmp_path / "v2.ts"
        AtomicWriter().write(path, "not typescript {", validate=False)
        assert path.read_text() == "not typescript {"

    def test_custom_validator(self, tmp_path):
        seen = []
        writer = AtomicWriter(validate_typescript=seen.append)
        writer.write(tmp_path / "a.ts", "anything")
        assert seen == ["anything"]

    def test_write_if_not_exists(self, tmp_path):
        path = tmp_path / "v2.ts"
        writer = AtomicWriter()
        assert writer.write_if_not_exists(path, VALID) is True

        with pytest.raises(FileExistsError):
            writer.write_if_not_exists(path, VALID)

    @pytest.mark.parametrize(
        "content",
        [
            "export enum Brace {\n  '{' = '{',\n  '}}' = '}}',\n}\n",
            "/** Get pet {id} */\nexport interface Pet {\n  'name': string;\n}\n",
            "// closes }\nexport type A = \"{\";\n",
            "export function getPet(id: number) {\n  return request(`/pet/${id}`);\n}\n",
        ],
    )
    def test_braces_in_literals_and_comments_are_ignored(self, tmp_path, content):
        path = tmp_path / "v2.ts"
        AtomicWriter().write(path, content)
        assert path.read_text() == content

    def test_literal_does_not_hide_unbalanced_code(self, tmp_path):
        with pytest.raises(OutputValidationError):
            AtomicWriter().validate("export type A = '}';\nexport interface B {\n")

    def test_export_inside_comment_is_not_enough(self):
        with pytest.raises(OutputValidationError):
            AtomicWriter().validate("// export type A = string;\n")
