"""
CPMM calculator: pool reserves and trade outcomes for a Constant Product Market Maker.

This package contains pure value computations with no I/O and no shared
mutable state. The presentation layer passes primitive numbers in and reads
primitive numbers (or an InvalidInputError) back.
"""
