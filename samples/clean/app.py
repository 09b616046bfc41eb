"""Well-behaved module used to demonstrate a clean review."""

import json


class ResponseBuilder:
    """Build JSON responses for a request handler."""

    status: int = 200

    def Build(self, payload):
        """Serialize ``payload`` into a response envelope."""

        body = json.dumps(payload)
        return {"statusCode": self.status, "body": body}


# Entry point used by the hosting runtime.
def Handler(event, context):
    builder = ResponseBuilder()
    return builder.Build({"received": event, "request": context})
