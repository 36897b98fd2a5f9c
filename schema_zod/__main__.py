"""Module entrypoint for `python -m schema_zod`.

Delegates to the generator CLI implementation.
"""

from .cli.run_generate import main


if __name__ == "__main__":
    main()
