import pytest

from tinylox.__main__ import main


@pytest.fixture
def source_file(tmp_path):
    def write(text):
        path = tmp_path / 'input.lox'
        path.write_text(text, encoding='utf-8')
        return str(path)
    return write


def run_cli(args):
    try:
        main(args)
    except SystemExit as e:
        return e.code
    return 0


def test_tokenize(source_file, capsys):
    code = run_cli(['tokenize', source_file('var x = "hi";\n1.5')])
    out = capsys.readouterr().out.splitlines()
    assert code == 0
    assert out == [
        'VAR var null',
        'IDENTIFIER x null',
        'EQUAL = null',
        'STRING "hi" hi',
        'SEMICOLON ; null',
        'NUMBER 1.5 1.5',
        'EOF  null',
    ]


def test_tokenize_lexical_error_exits_65(source_file, capsys):
    code = run_cli(['tokenize', source_file('var a = "abc;')])
    captured = capsys.readouterr()
    assert code == 65
    assert captured.err.strip() == '[line 1] Error: Unterminated string.'
    assert captured.out.splitlines()[-1] == 'EOF  null'


def test_parse(source_file, capsys):
    code = run_cli(['parse', source_file('1 + 2 * 3')])
    assert code == 0
    assert capsys.readouterr().out == '(+ 1.0 (* 2.0 3.0))\n'


def test_parse_with_lark_frontend(source_file, capsys):
    code = run_cli(['--frontend', 'lark', 'parse', source_file('(1 - 2) - -3')])
    assert code == 0
    assert capsys.readouterr().out == '(- (group (- 1.0 2.0)) (- 3.0))\n'


def test_parse_error_exits_65(source_file, capsys):
    code = run_cli(['parse', source_file('(1 + 2')])
    captured = capsys.readouterr()
    assert code == 65
    assert captured.out == ''
    assert captured.err.strip() == "[line 1] Error at '': Expect ')' after expression."


def test_parse_lexical_error_exits_65(source_file, capsys):
    code = run_cli(['parse', source_file('1 + @')])
    assert code == 65
    assert 'Unexpected character: @' in capsys.readouterr().err


def test_evaluate(source_file, capsys):
    code = run_cli(['evaluate', source_file('"a" + "b" == "ab"')])
    assert code == 0
    assert capsys.readouterr().out == 'true\n'


def test_evaluate_number(source_file, capsys):
    assert run_cli(['evaluate', source_file('10 / 4 * 2')]) == 0
    assert capsys.readouterr().out == '5.0\n'


def test_evaluate_runtime_error_exits_70(source_file, capsys):
    code = run_cli(['evaluate', source_file('1 + "x"')])
    captured = capsys.readouterr()
    assert code == 70
    assert captured.err.strip() == 'Operands must be two numbers or two strings.'


def test_run(source_file, capsys):
    code = run_cli(['run', source_file('var a = 1; { a = a + 1; } print a;')])
    assert code == 0
    assert capsys.readouterr().out == '2.0\n'


@pytest.mark.parametrize('frontend', ['descent', 'lark'])
def test_run_undefined_variable_exits_70(source_file, capsys, frontend):
    code = run_cli(['--frontend', frontend, 'run', source_file('print "ok";\nprint x;')])
    captured = capsys.readouterr()
    assert code == 70
    assert captured.out == 'ok\n'
    assert captured.err.strip() == "Undefined variable 'x'.\n[line 2]"


def test_run_parse_error_exits_65_without_running(source_file, capsys):
    code = run_cli(['run', source_file('print "never";\nvar = 3;')])
    captured = capsys.readouterr()
    assert code == 65
    assert captured.out == ''
    assert captured.err.strip() == "[line 2] Error at '=': Expect variable name."


def test_missing_file_exits_1(tmp_path, capsys):
    code = run_cli(['run', str(tmp_path / 'absent.lox')])
    assert code == 1
    assert 'not found' in capsys.readouterr().err


def test_verbose_run_writes_debug_file(source_file, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    code = run_cli(['-vvv', 'run', source_file('print 1 + 1;')])
    assert code == 0
    assert capsys.readouterr().out == '2.0\n'
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8').splitlines()
    assert trace[-1] == 'eval Binary -> 2.0'


@pytest.mark.parametrize('frontend', ['descent', 'lark'])
def test_deeply_nested_groups_evaluate(source_file, capsys, frontend):
    code = run_cli(['--frontend', frontend, 'evaluate', source_file('(' * 300 + '1' + ')' * 300)])
    assert code == 0
    assert capsys.readouterr().out == '1.0\n'


@pytest.mark.parametrize('frontend', ['descent', 'lark'])
def test_nesting_beyond_the_stack_exits_65(source_file, capsys, frontend):
    code = run_cli(['--frontend', frontend, 'evaluate', source_file('(' * 100000 + '1' + ')' * 100000)])
    captured = capsys.readouterr()
    assert code == 65
    assert captured.out == ''
    assert captured.err.strip().endswith('Expression nested too deeply.')


def test_long_chain_in_every_mode(source_file, capsys):
    chain = ' + '.join(['1'] * 2000)
    assert run_cli(['evaluate', source_file(chain)]) == 0
    assert capsys.readouterr().out == '2000.0\n'
    assert run_cli(['run', source_file(f'var a = {chain};\nprint a;')]) == 0
    assert capsys.readouterr().out == '2000.0\n'
    assert run_cli(['parse', source_file(chain)]) == 0
    assert capsys.readouterr().out.startswith('(+ ' * 1999 + '1.0 1.0)')
