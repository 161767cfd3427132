"""Builder for DynamoDB SET/REMOVE update expressions."""

from typing import Any

from core.db.dynamo import serialize_item


class UpdateExpression:
    """Collects SET and REMOVE actions behind #name / :value placeholders.

    Placeholders are always used so reserved words such as ``name`` are safe.
    Each attribute may appear in at most one action.
    """

    def __init__(self) -> None:
        self._set: list[str] = []
        self._remove: list[str] = []
        self._names: dict[str, str] = {}
        self._values: dict[str, Any] = {}

    def _placeholder(self, attribute: str) -> str:
        placeholder = f"#{attribute}"
        if placeholder in self._names:
            raise ValueError(f"attribute {attribute!r} is already part of this update")
        self._names[placeholder] = attribute
        return placeholder

    def set(self, attribute: str, value: Any) -> "UpdateExpression":
        if value is None:
            raise ValueError(f"cannot SET {attribute!r} to None, use remove()")
        name = self._placeholder(attribute)
        self._values[f":{attribute}"] = value
        self._set.append(f"{name} = :{attribute}")
        return self

    def remove(self, attribute: str) -> "UpdateExpression":
        self._remove.append(self._placeholder(attribute))
        return self

    def assign(self, attribute: str, value: Any) -> "UpdateExpression":
        """SET when a value is given, REMOVE when it is None."""
        if value is None:
            return self.remove(attribute)
        return self.set(attribute, value)

    def build(self) -> dict[str, Any]:
        clauses = []
        if self._set:
            clauses.append("SET " + ", ".join(self._set))
        if self._remove:
            clauses.append("REMOVE " + ", ".join(self._remove))
        if not clauses:
            raise ValueError("update expression has no actions")

        params: dict[str, Any] = {
            "UpdateExpression": " ".join(clauses),
            "ExpressionAttributeNames": dict(self._names),
        }
        if self._values:
            params["ExpressionAttributeValues"] = serialize_item(self._values)
        return params
