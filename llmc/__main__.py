"""Allow running as: python -m llmc"""

from llmc.cli.main import run

if __name__ == "__main__":
    run()
