"""
Tests for the rtokenize command line interface (rtoken.rtokenize.main).
"""

from pathlib import Path
import pytest
from rtoken.rtokenize import main


def read_lines(path: Path) -> list:
    return path.read_text(encoding='utf-8').split('\n')


class TestMain:
    """Test tokenization of files."""

    def test_output_file(self, input_file: Path, tmp_path: Path):
        output_file = tmp_path / 'output.tok'
        assert main(['-l', 'en', '-o', str(output_file), str(input_file)]) == 0
        assert read_lines(output_file) == ["Dr. Smith went to Washington D.C. yesterday .",
                                           "It costs $ 5,300 today .",
                                           "",
                                           "Wait ... what ?",
                                           ""]

    def test_stdout(self, input_file: Path, capsys):
        assert main([str(input_file)]) == 0
        assert capsys.readouterr().out.startswith("Dr. Smith went to Washington D.C. yesterday .\n")

    def test_multiple_input_files_in_order(self, tmp_path: Path):
        file1 = tmp_path / 'a.txt'
        file2 = tmp_path / 'b.txt'
        file1.write_text("One.\nTwo.\n", encoding='utf-8')
        file2.write_text("Three.\n", encoding='utf-8')
        output_file = tmp_path / 'out.tok'
        assert main(['-o', str(output_file), str(file1), str(file2)]) == 0
        assert output_file.read_text(encoding='utf-8') == "One .\nTwo .\nThree .\n"

    def test_aggressive_and_no_escape(self, tmp_path: Path):
        input_file = tmp_path / 'in.txt'
        input_file.write_text("An X-ray & \"more\".\n", encoding='utf-8')
        output_file = tmp_path / 'out.tok'
        assert main(['-a', '-no-escape', '-o', str(output_file), str(input_file)]) == 0
        assert output_file.read_text(encoding='utf-8') == 'An X @-@ ray & " more " .\n'
        assert main(['-o', str(output_file), str(input_file)]) == 0
        assert output_file.read_text(encoding='utf-8') == 'An X-ray &amp; &quot; more &quot; .\n'

    def test_language_option(self, tmp_path: Path):
        input_file = tmp_path / 'in.txt'
        input_file.write_text("l'amour\n", encoding='utf-8')
        output_file = tmp_path / 'out.tok'
        assert main(['-l', 'fr', '-no-escape', '-o', str(output_file), str(input_file)]) == 0
        assert output_file.read_text(encoding='utf-8') == "l' amour\n"

    def test_verbose(self, input_file: Path, tmp_path: Path):
        output_file = tmp_path / 'out.tok'
        assert main(['-v', '-l', 'xx', '-o', str(output_file), str(input_file)]) == 0
        assert read_lines(output_file)[0] == "Dr. Smith went to Washington D.C. yesterday ."

    def test_missing_input_file(self, tmp_path: Path):
        assert main(['-o', str(tmp_path / 'out.tok'), str(tmp_path / 'no-such-file.txt')]) == 1


class TestLegacyOptions:
    """Test options kept for compatibility."""

    def test_ignored_options(self, input_file: Path, tmp_path: Path):
        output_file = tmp_path / 'out.tok'
        assert main(['-b', '-q', '-x', '-time', '-threads', '4', '-lines', '100',
                     '-o', str(output_file), str(input_file)]) == 0
        assert read_lines(output_file)[1] == "It costs $ 5,300 today ."

    @pytest.mark.parametrize("option", ['-protected', '-penn'])
    def test_not_implemented(self, option: str, input_file: Path):
        assert main([option, str(input_file)]) == 1

    def test_help(self, capsys):
        assert main(['-h']) == 1
        assert 'usage' in capsys.readouterr().err

    def test_unknown_option(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['--no-such-option'])
        assert exc_info.value.code == 1

    def test_missing_option_value(self):
        with pytest.raises(SystemExit) as exc_info:
            main(['-l'])
        assert exc_info.value.code == 1
