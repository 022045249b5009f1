"""
Entry point module, in case you use `python -m srecfix`.

See https://docs.python.org/3/using/cmdline.html#cmdoption-m
"""
from .cli import main as _main


def main(module_name):
    if module_name == '__main__':
        _main(prog_name='srecfix')


main(__name__)
