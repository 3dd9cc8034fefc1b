"""
Mock invokers.

They return fake (but realistic) native payloads without a device or store SDK.
Mock invokers must follow the SAME interface as the real HTTP invoker.
"""
