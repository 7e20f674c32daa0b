class DraftError(RuntimeError):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class SectionNotFoundError(DraftError):
    pass


class NoUnnamedFragmentsError(SectionNotFoundError):
    def __init__(self):
        super().__init__("no unnamed fragments found")


class NoSuchSectionError(SectionNotFoundError):
    def __init__(self, name):
        super().__init__(f"section {name} was never defined")
        self.name = name
