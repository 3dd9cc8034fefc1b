"""
Real HTTP invokers.

Must implement the same interface as the mock invokers and return raw results
exactly as the native SDK produced them; decoding belongs to the normalizers.
"""
