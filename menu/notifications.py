from django.contrib import messages


class Notifier:
    """Transient user notifications, backed by Django's messages framework."""

    def __init__(self, request):
        self.request = request

    def success(self, text):
        messages.success(self.request, text)

    def error(self, text):
        messages.error(self.request, text)
