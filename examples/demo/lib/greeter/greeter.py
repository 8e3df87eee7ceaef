"""Greeter definition used by the demo plugin tree."""

from convention_loader.descriptor import ConventionObject


class Demo_Lib_Greeter(ConventionObject):
    """Render a greeting from the template shipped next to this file."""

    def __init__(self, params):
        self.greeting = params.get('greeting', 'Hello')

    def greet(self, who: str) -> str:
        with open(self.relative_file('templates/hello.txt'), encoding='utf-8') as f:
            template = f.read().strip()
        return template.format(greeting=self.greeting, who=who)
