"""
Allow running the package directly: python -m mandelbrot_explorer
"""
from argparse import ArgumentParser

from .settings import ConfigError, load_config, set_verbose


def build_parser():
    parser = ArgumentParser(prog='mandelbrot_explorer')

    parser.add_argument('--size', type=int,
                        dest='display_size', help='edge length of the square display in pixels',
                        metavar='SIZE', default=None)

    parser.add_argument('--max-iterations', type=int,
                        dest='max_iterations', help='starting iteration cap',
                        metavar='MAX_ITERATIONS', default=None)

    parser.add_argument('--settings', type=str,
                        dest='settings', help='path to a settings.json to use instead of the bundled one',
                        metavar='PATH', default=None)

    parser.add_argument('--verbose', '-v', action='store_true',
                        help='print render timings and navigation progress')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    try:
        config = load_config(args.settings).with_overrides(
            display_size=args.display_size,
            max_iterations=args.max_iterations,
        )
    except ConfigError as e:
        parser.error(str(e))

    from .app import run
    run(config)


if __name__ == "__main__":
    main()
