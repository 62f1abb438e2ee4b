from flask import current_app


def get_service(name):
    return current_app.extensions["aid_service"][name]
