from flask_wtf import FlaskForm
from werkzeug.datastructures import ImmutableMultiDict


class ApiForm(FlaskForm):
    """Base form for JSON request bodies.

    Flask-WTF reads ``request.get_json()`` into the form when the request is
    JSON.  CSRF is enforced globally by CSRFProtect through the X-CSRFToken
    header, so the per-form token is switched off.

    A JSON ``null`` is treated as an absent key: optional fields stay empty and
    PATCH bodies leave the stored value alone.
    """

    class Meta:
        csrf = False

        def wrap_formdata(self, form, formdata):
            formdata = super().wrap_formdata(form, formdata)
            if formdata is None:
                return None
            return ImmutableMultiDict([
                (key, value) for key, value in formdata.items(multi=True)
                if value is not None
            ])
