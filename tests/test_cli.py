import pytest

from mandelbrot_explorer import __main__ as cli


def test_parser_defaults_leave_settings_alone():
    args = cli.build_parser().parse_args([])

    assert args.display_size is None
    assert args.max_iterations is None
    assert args.settings is None
    assert not args.verbose


def test_parser_reads_overrides():
    args = cli.build_parser().parse_args(['--size', '720', '--max-iterations', '1000', '-v'])

    assert args.display_size == 720
    assert args.max_iterations == 1000
    assert args.verbose


def test_invalid_override_exits_with_usage_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(['--size', '0'])

    assert excinfo.value.code == 2
    assert 'display_size' in capsys.readouterr().err
