class TransactionCompletedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        amount = context.get("amount")
        amount_line = f"Amount: {amount} {context.get('currency', 'INR')}\n" if amount is not None else ""
        return {
            "subject": "Payout completed",
            "body": (
                f"Hi {context.get('full_name') or 'there'},\n\n"
                f"{context.get('message')}\n"
                f"{amount_line}\n"
                "The SafarHub Team"
            ),
        }
