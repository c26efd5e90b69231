from datetime import datetime


def greeting_context(request):
    current_hour = datetime.now().hour

    if 5 <= current_hour < 12:
        greeting = 'Добро утро'
    elif 12 <= current_hour < 18:
        greeting = 'Добър ден'
    else:
        greeting = 'Добър вечер'

    return {'greeting': greeting}


def session_info(request):
    """Whether the navbar shows the admin links; no backend call is made here."""
    context = getattr(request, 'auth_context', None)
    return {'has_admin_session': bool(context and context.has_tokens)}
