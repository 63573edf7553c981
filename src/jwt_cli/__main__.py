"""
Top-level entry point: python -m jwt_cli <command>

Commands:
    decode    decode (and with --validate, verify) a JWT
    generate  print a test JWT with realistic claims
"""

from .cli import main

if __name__ == "__main__":
    main()
