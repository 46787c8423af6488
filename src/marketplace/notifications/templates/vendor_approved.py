"""Sent when an admin approves a vendor account."""


class VendorApprovedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("full_name") or "there"
        return {
            "subject": "Your SafarHub vendor access is unlocked",
            "body": (
                f"Hi {name},\n\n"
                "Your vendor account has been approved. Your listings are now visible "
                "to travellers on SafarHub, and you can start accepting bookings.\n\n"
                "The SafarHub Team"
            ),
        }
