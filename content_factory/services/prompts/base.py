"""
Base prompt template class.
"""

from dataclasses import dataclass


@dataclass
class PromptTemplate:
    """
    A prompt template with placeholders.

    Usage:
        template = PromptTemplate(
            template="Hello {name}!",
            description="A greeting"
        )
        result = template.format(name="World")

    A template formatted without arguments is returned verbatim, so system
    prompts may contain literal JSON braces.
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        """Format the template with provided values"""
        if not kwargs:
            return self.template
        return self.template.format(**kwargs)

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"
