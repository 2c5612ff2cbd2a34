from rich.pretty import pprint

from arguable import *

__prog__ = "main.py"


parser = Parser(descr="copy files somewhere else", colorful=True)
parser.add_option("-v", "--verbose", name="verbose", descr="print every copied file")
parser.add_option("-j", "--jobs", name="jobs", type=int, descr="number of parallel copies")
parser.add_option("--exclude", name="exclude", type=str, nargs=VARIABLE, descr="names to skip")
parser.add_argument("dst", descr="destination directory")
parser.add_argument("src", nargs=VARIABLE, descr="files to copy")


if __name__ == '__main__':
    pprint(invoke(parser))
    parser.display_status()
