from . import cli

# Invoked via `python -m requestgate.cli`.
if __name__ == "__main__":
    cli(prog_name = "requestgate")
