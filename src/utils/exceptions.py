class PromptOptimizerError(Exception):
    """Base exception for the prompt optimizer."""


class FrameworkNotFoundError(PromptOptimizerError):
    def __init__(self, framework_id: str):
        self.framework_id = framework_id
        super().__init__(f"Framework not found: {framework_id}")


class InvalidPromptError(PromptOptimizerError):
    def __init__(self, detail: str):
        super().__init__(f"Invalid prompt: {detail}")


class SemanticServiceError(PromptOptimizerError):
    def __init__(self, backend: str, detail: str):
        self.backend = backend
        super().__init__(f"Semantic service error ({backend}): {detail}")


class SemanticServiceUnavailableError(SemanticServiceError):
    def __init__(self, backend: str):
        super().__init__(backend, "service is not initialised")
