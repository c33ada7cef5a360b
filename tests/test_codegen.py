# =============================================================================
# test_codegen.py - Instruction Encoding Tests
# =============================================================================
# Tests for the second assembler pass and the CodeGenerator outputs.
#
# Test coverage includes:
#   - A-instruction encoding (literals, labels, predefined, variables)
#   - C-instruction encoding and fallback fields
#   - Strict mode error collection
#   - Listing and symbol output
# =============================================================================

import pytest

from hackasm.assembler.codegen import CodeGenerator, encode_address, encode_compute
from hackasm.assembler.parser import parse_source
from hackasm.assembler.symbols import SymbolKind, SymbolTable, build_symbol_table
from hackasm.errors import AssemblerError, AssemblySyntaxError, TooManyErrors


def generate(source: str, strict: bool = False) -> list[str]:
    return CodeGenerator(strict=strict).generate(parse_source(source))


# =============================================================================
# Encoding Helpers
# =============================================================================

class TestEncodeHelpers:
    """Test the pure encoding functions."""

    def test_encode_address(self):
        assert encode_address(21) == "0000000000010101"

    @pytest.mark.parametrize("fields,word", [
        (("D", "A", ""), "1110110000010000"),
        (("D", "D+A", ""), "1110000010010000"),
        (("M", "D", ""), "1110001100001000"),
        (("", "0", "JMP"), "1110101010000111"),
        (("AM", "M-1", ""), "1111110010101000"),
        (("", "D", "JGT"), "1110001100000001"),
        (("AMD", "D|M", "JLE"), "1111010101111110"),
    ])
    def test_encode_compute(self, fields, word):
        assert encode_compute(*fields) == word

    def test_encode_compute_fallback(self):
        assert encode_compute("XY", "D+2", "JJJ") == "1110000000000000"


# =============================================================================
# A-Instructions
# =============================================================================

class TestAddressInstructions:
    """Test A-instruction encoding in pass 2."""

    def test_literals(self):
        assert generate("@0\n@5\n@65535") == [
            "0000000000000000",
            "0000000000000101",
            "1111111111111111",
        ]

    def test_predefined_symbols(self):
        assert generate("@SCREEN\n@KBD\n@R15") == [
            "0100000000000000",
            "0110000000000000",
            "0000000000001111",
        ]

    def test_register_and_pointer_alias(self):
        """R0 and SP are the same address."""
        words = generate("@R0\n@SP\n@R4\n@THAT")
        assert words[0] == words[1] == "0000000000000000"
        assert words[2] == words[3] == "0000000000000100"

    def test_forward_label_reference(self):
        words = generate("@END\n0;JMP\n(END)\n@END\n0;JMP")
        assert words[0] == "0000000000000010"
        assert words[2] == "0000000000000010"

    def test_variables_allocated_from_16(self):
        words = generate("@first\nM=0\n@second\nM=0\n@first\n@second")
        assert words[0] == "0000000000010000"
        assert words[2] == "0000000000010001"
        assert words[4] == "0000000000010000"
        assert words[5] == "0000000000010001"

    def test_out_of_range_number_is_a_symbol(self):
        assert generate("@65536") == ["0000000000010000"]

    def test_negative_number_is_a_symbol(self):
        assert generate("@-1\n@-1") == ["0000000000010000", "0000000000010000"]

    def test_label_is_not_a_variable(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("@LOOP\n(LOOP)\n@x"))
        table = codegen.get_symbol_table()
        assert table.get_symbol("LOOP").kind is SymbolKind.LABEL
        assert table["x"] == 16

    def test_empty_operand_allocates_variable(self):
        assert generate("@") == ["0000000000010000"]


# =============================================================================
# C-Instructions
# =============================================================================

class TestComputeInstructions:
    """Test C-instruction encoding in pass 2."""

    def test_unknown_comp_encodes_zero_field(self):
        assert generate("D=D+2") == ["1110000000010000"]

    def test_unknown_comp_differs_from_constant_zero(self):
        words = generate("0\nfoo")
        assert words[0] == "1110101010000000"
        assert words[1] == "1110000000000000"
        assert words[0] != words[1]

    def test_spaced_fields_fall_back(self):
        assert generate("D = A") == ["1110000000000000"]

    def test_last_jump_field_wins(self):
        assert generate("D=A;JMP;JEQ") == ["1110110000010010"]

    def test_malformed_label_encodes_as_compute(self):
        assert generate("(LOOP) // x") == ["1110000000000000"]

    def test_every_word_is_sixteen_bits(self):
        source = "@1\nD=A\nfoo\n@x\nAMD=M+1;JNE\n;\n="
        for word in generate(source):
            assert len(word) == 16
            assert set(word) <= {"0", "1"}


# =============================================================================
# Encode with an External Table
# =============================================================================

class TestEncodeWithTable:
    """Test pass 2 against a table built separately."""

    def test_encode_extends_table(self):
        statements = parse_source("(LOOP)\n@n\n@LOOP\n@m")
        table = build_symbol_table(statements)
        words = CodeGenerator().encode(statements, table)
        assert words == [
            "0000000000010000",
            "0000000000000000",
            "0000000000010001",
        ]
        assert table["n"] == 16
        assert table["m"] == 17

    def test_generate_is_deterministic(self):
        statements = parse_source("@a\n@b\n(L)\n@L\n@a")
        codegen = CodeGenerator()
        assert codegen.generate(statements) == codegen.generate(statements)


# =============================================================================
# Strict Mode
# =============================================================================

class TestStrictMode:
    """Test strict-mode error collection."""

    def test_valid_source_passes(self):
        assert generate("@2\nD=A;JGT", strict=True) == [
            "0000000000000010",
            "1110110000010001",
        ]

    def test_unknown_comp_raises(self):
        with pytest.raises(AssemblerError) as exc_info:
            generate("@1\nD=D+2", strict=True)
        message = str(exc_info.value)
        assert "unknown comp 'D+2'" in message
        assert "<input>:2:1" in message

    def test_all_errors_reported(self):
        codegen = CodeGenerator(strict=True)
        with pytest.raises(AssemblerError):
            codegen.generate(parse_source("DM=A\nD;JMPP\nD=X\n@"))
        assert codegen.has_errors()
        assert len(codegen._errors.errors) == 4
        assert all(isinstance(e, AssemblySyntaxError) for e in codegen._errors.errors)
        report = codegen.get_error_report()
        assert "unknown dest 'DM'" in report
        assert "unknown jump 'JMPP'" in report
        assert "unknown comp 'X'" in report
        assert "missing operand" in report
        assert "4 errors" in report

    def test_spacing_hint(self):
        with pytest.raises(AssemblerError) as exc_info:
            generate("D=D + A", strict=True)
        assert "did you mean 'D+A'?" in str(exc_info.value)

    def test_permissive_mode_has_no_errors(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source("DM=A\nD;JMPP\nD=X"))
        assert not codegen.has_errors()

    def test_errors_cleared_between_runs(self):
        codegen = CodeGenerator(strict=True)
        with pytest.raises(AssemblerError):
            codegen.generate(parse_source("D=X"))
        codegen.generate(parse_source("D=A"))
        assert not codegen.has_errors()

    def test_stops_at_error_limit(self):
        codegen = CodeGenerator(strict=True)
        with pytest.raises(TooManyErrors) as exc_info:
            codegen.generate(parse_source("D=X\n" * 150))
        assert "Too many errors (100)" in str(exc_info.value)
        assert len(codegen._errors.errors) == 100

    def test_address_past_sixteen_bits_rejected(self):
        table = SymbolTable()
        table.define_label("END", 0x10000)
        with pytest.raises(AssemblerError) as exc_info:
            CodeGenerator(strict=True).encode(parse_source("@END"), table)
        assert "does not fit in 16 bits" in str(exc_info.value)


# =============================================================================
# Address Width
# =============================================================================

class TestAddressWidth:
    """Test that words stay 16 bits wide past the last address."""

    def test_label_past_last_rom_address_wraps(self):
        words = generate("@0\n" * 0x10000 + "(END)\n@END")
        assert len(words) == 0x10001
        assert words[-1] == "0000000000000000"

    def test_variable_past_last_ram_address_wraps(self):
        table = SymbolTable()
        for i in range(0x10000 - 16):
            table.resolve(f"v{i}")
        words = CodeGenerator().encode(parse_source("@last"), table)
        assert table["last"] == 0x10000
        assert words == ["0000000000000000"]


# =============================================================================
# Listing and Symbol Output
# =============================================================================

class TestOutputs:
    """Test listing, symbol and .hack output."""

    SOURCE = "// sum\n@i\nM=1\n(LOOP)\n@LOOP\n0;JMP\n"

    def test_listing(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source(self.SOURCE))
        listing = codegen.get_listing()
        assert "Hack Assembler Listing" in listing
        assert "0000000000010000" in listing
        assert "(LOOP)" in listing
        assert "Symbol Table" in listing
        assert "(variable)" in listing

    def test_listing_line_format(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source(self.SOURCE))
        lines = codegen.get_listing().splitlines()
        assert "    0  0000000000010000      2  @i" in lines
        assert "    2  0000000000000010      5  @LOOP" in lines

    def test_write_hack(self, tmp_path):
        codegen = CodeGenerator()
        codegen.generate(parse_source(self.SOURCE))
        out = tmp_path / "Sum.hack"
        codegen.write_hack(out)
        assert out.read_text() == (
            "0000000000010000\n"
            "1110111111001000\n"
            "0000000000000010\n"
            "1110101010000111\n"
        )

    def test_write_symbols(self, tmp_path):
        codegen = CodeGenerator()
        codegen.generate(parse_source(self.SOURCE))
        out = tmp_path / "Sum.sym"
        codegen.write_symbols(out)
        lines = out.read_text().splitlines()
        assert lines[0] == "# Symbol table"
        assert "LOOP 2 label" in lines
        assert "i 16 variable" in lines
        assert "SCREEN 16384 predefined" in lines

    def test_get_symbols(self):
        codegen = CodeGenerator()
        codegen.generate(parse_source(self.SOURCE))
        symbols = codegen.get_symbols()
        assert symbols["LOOP"] == 2
        assert symbols["i"] == 16
