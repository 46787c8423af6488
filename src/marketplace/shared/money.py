def format_rupees(amount: float) -> str:
    """₹500 for whole amounts, ₹499.5 otherwise."""
    return f"₹{int(amount)}" if float(amount).is_integer() else f"₹{amount}"
