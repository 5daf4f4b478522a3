"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the pricer library.
Any compliant implementation MUST pass these tests.

test_pricing_properties.py covers, by invariant:
1. Pricing - d1 > d2, put-call parity, Greek signs
2. Normal distribution - bounds, symmetry, monotonicity
3. Diagnostics - exact-match precision, zero-reference agreement, expiry payoffs
4. Determinism - identical results across calls, decimal contexts and threads

These tests use hypothesis for property-based testing.
"""
