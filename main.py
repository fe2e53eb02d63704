from passgen import run_passgen
import sys

if __name__ == '__main__':
    sys.exit(run_passgen(sys.argv[1:]))
