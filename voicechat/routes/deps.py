from fastapi import Request
from voicechat.services.registry import Services


def get_services(request: Request) -> Services:
    return request.app.state.services
