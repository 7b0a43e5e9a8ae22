#!/usr/bin/env python3
"""Command-line driver for DFT-based polynomial multiplication."""

import argparse
import re
import sys

import numpy as np
import sympy

from dft_base import AcceleratorUnavailableError, is_power_of_two
from poly_mult import PrecisionError, multiply, power, square
from transforms import Backend, DEFAULT_BACKEND, check_backend_agreement, check_round_trip

X = sympy.Symbol('x')

_COEFF_LIST = re.compile(r"^\s*-?\d+(\s*,\s*-?\d+)*\s*$")


def parse_polynomial(text: str) -> list:
    """
    Parse a polynomial in x into ascending integer coefficients.

    Accepts either a SymPy expression ("3*x**2 - 1") or a comma separated
    coefficient list, constant term first ("-1,0,3").
    """
    if _COEFF_LIST.match(text):
        return [int(c) for c in text.split(',')]

    try:
        poly = sympy.Poly(sympy.sympify(text), X)
    except (sympy.SympifyError, sympy.PolynomialError) as e:
        raise ValueError(f"Cannot parse {text!r} as a polynomial in x: {e}") from e
    if poly.domain != sympy.ZZ:
        raise ValueError(f"{text!r} must have integer coefficients (domain is {poly.domain})")
    return [int(c) for c in reversed(poly.all_coeffs())]


def format_polynomial(coeffs: list):
    """SymPy expression for ascending coefficients."""
    return sympy.Poly(list(reversed(coeffs)), X).as_expr()


def _print_result(coeffs: list):
    print(f"coefficients: {coeffs}")
    print(f"polynomial:   {format_polynomial(coeffs)}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Multiply integer polynomials with recursive, iterative or accelerator DFTs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s multiply "1 + x" "1 + x"              # -> [1, 2, 1]
  %(prog)s multiply 1,2 3,4 --backend recursive  # -> [3, 10, 8]
  %(prog)s square "x**3 - 2" -v
  %(prog)s power "1 + x" -k 5 --check-precision
  %(prog)s check 16 --num-tests 10               # round trip + backend agreement
        """)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--backend', choices=[b.value for b in Backend], default=DEFAULT_BACKEND.value,
                        help=f'Transform backend (default: {DEFAULT_BACKEND.value})')
    common.add_argument('--dtype', choices=['complex64', 'complex128'], default='complex128',
                        help='Complex precision of the transform (default: complex128)')
    common.add_argument('--check-precision', action='store_true',
                        help='Fail instead of printing a result whose rounding cannot be trusted')
    common.add_argument('-v', '--verbose', action='store_true',
                        help='Print transform diagnostics')

    subparsers = parser.add_subparsers(dest='command', required=True)

    parser_mult = subparsers.add_parser('multiply', parents=[common], help='Multiply two polynomials')
    parser_mult.add_argument('p', help='First polynomial, e.g. "1 + 2*x" or 1,2')
    parser_mult.add_argument('q', help='Second polynomial')

    parser_square = subparsers.add_parser('square', parents=[common], help='Square a polynomial')
    parser_square.add_argument('p', help='Polynomial to square')

    parser_power = subparsers.add_parser('power', parents=[common], help='Raise a polynomial to a power')
    parser_power.add_argument('p', help='Base polynomial')
    parser_power.add_argument('-k', '--exponent', type=int, required=True,
                              help='Exponent (integer >= 1)')

    parser_check = subparsers.add_parser('check', help='Round trip and backend agreement self-checks')
    parser_check.add_argument('N', type=int, help='Transform length (power of two)')
    parser_check.add_argument('--num-tests', type=int, default=3,
                              help='Number of random vectors (default: 3)')
    parser_check.add_argument('-v', '--verbose', action='store_true',
                              help='Print per-vector errors')

    args = parser.parse_args(argv)

    if args.command == 'check':
        if not is_power_of_two(args.N):
            print(f"Error: N={args.N} must be a power of two")
            return 1
        try:
            success = True
            for backend in Backend:
                success = check_round_trip(args.N, args.num_tests, backend=backend, verbose=args.verbose) and success
            success = check_backend_agreement(args.N, args.num_tests, verbose=args.verbose) and success
        except AcceleratorUnavailableError as e:
            print(f"Error: {e}")
            return 1
        print("All checks passed" if success else "Some checks FAILED")
        return 0 if success else 1

    options = dict(backend=args.backend, dtype=np.dtype(args.dtype),
                   check_precision=args.check_precision, verbose=args.verbose)
    try:
        if args.command == 'multiply':
            result = multiply(parse_polynomial(args.p), parse_polynomial(args.q), **options)
        elif args.command == 'square':
            result = square(parse_polynomial(args.p), **options)
        else:
            result = power(parse_polynomial(args.p), args.exponent, **options)
    except (ValueError, PrecisionError, AcceleratorUnavailableError) as e:
        print(f"Error: {e}")
        return 1

    _print_result(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
