from wtforms import IntegerField, StringField


class NullableIntegerField(IntegerField):
    """IntegerField that takes a JSON ``null`` as an explicit empty value."""

    def process_formdata(self, valuelist):
        if len(valuelist) > 1:
            self.data = None
            raise ValueError(self.gettext("Expected a single value."))
        if valuelist and valuelist[0] is None:
            self.data = None
            return
        if valuelist and (isinstance(valuelist[0], bool) or not isinstance(valuelist[0], (int, str))):
            self.data = None
            raise ValueError(self.gettext("Not a valid integer value."))
        super().process_formdata(valuelist)


class StrictStringField(StringField):
    """StringField that refuses JSON numbers, lists and objects."""

    def process_formdata(self, valuelist):
        if len(valuelist) > 1:
            self.data = None
            raise ValueError(self.gettext("Expected a single value."))
        if valuelist and valuelist[0] is not None and not isinstance(valuelist[0], str):
            self.data = None
            raise ValueError(self.gettext("Not a valid string value."))
        super().process_formdata(valuelist)


def provided(form, *names):
    """Fields of ``form`` that were present in the submitted payload."""
    return {name: form[name].data for name in names if form[name].raw_data}
