"""Button widget for the demo plugin tree."""

from convention_loader.descriptor import ConventionObject


class Demo_Lib_Widgets_Button(ConventionObject):

    def __init__(self, params):
        self.label = params.get('label', '')
