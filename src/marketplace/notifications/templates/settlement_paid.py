from marketplace.shared.money import format_rupees


class SettlementPaidTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        amount = context.get("amount_paid") or 0
        currency = context.get("currency", "INR")
        shown = format_rupees(amount) if currency == "INR" else f"{amount} {currency}"
        return {
            "subject": "Settlement paid",
            "body": (
                f"Hi {context.get('full_name') or 'there'},\n\n"
                f"We have paid {shown} for booking {context.get('booking_id')}.\n\n"
                "The SafarHub Team"
            ),
        }
