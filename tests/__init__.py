"""
Test suite for bignum

Contains:
- tests/unit/          : Unit tests for BigInt, BigDecimal, arithmetic properties
                         and serialization contracts
"""
