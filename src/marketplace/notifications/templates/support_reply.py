class SupportReplyTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": f"Re: {context.get('subject')}",
            "body": (
                f"Hi {context.get('full_name') or 'there'},\n\n"
                f"{context.get('reply')}\n\n"
                "The SafarHub Support Team"
            ),
        }
