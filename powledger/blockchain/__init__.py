# Blockchain Module
"""
Proof-of-work ledger implementation including:
- Transactions with a canonical signing transcript
- Immutable, mined blocks
- Proof of Work with configurable difficulty
- Append-only ledger with genesis block and coinbase rewards
"""

_EXPORTS = {
    'Transaction': 'transaction',
    'COINBASE_SENDER': 'transaction',
    'Block': 'block',
    'compute_hash': 'block',
    'create_block': 'block',
    'genesis': 'block',
    'GENESIS_PREV_HASH': 'block',
    'ProofOfWork': 'proof',
    'compute_transcript': 'proof',
    'calculate_target': 'proof',
    'Ledger': 'ledger',
    'initialize': 'ledger',
}


# Lazy imports to avoid RuntimeWarning when running modules directly
def __getattr__(name):
    """Resolve public names from their submodules on first access."""
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    module = import_module(f".{module_name}", __name__)
    return getattr(module, name)


__all__ = list(_EXPORTS)
