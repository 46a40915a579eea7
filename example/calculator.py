"""Calculator with a collaborator method - the target of the mock examples."""


class Calculator:
    def __init__(self, offset: int = 0):
        self.offset = offset
        self.history: list[int] = []

    def mock_me(self, a: int, b: int) -> int:
        return a * b

    def compute(self) -> int:
        result = self.mock_me(8, 20) + self.offset
        self.history.append(result)
        return result

    @staticmethod
    def describe() -> str:
        return "calculator"
