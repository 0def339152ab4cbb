from flask import jsonify

def response(status_code, ok, message=None, **payload):
    """
    Format standar respon API: {success, message?, ...payload}
    """
    res_structure = {"success": ok}
    if message:
        res_structure["message"] = message
    res_structure.update(payload)
    return jsonify(res_structure), status_code

def success(message=None, status_code=200, **payload):
    return response(status_code, True, message, **payload)

def error(message="Something went wrong", status_code=400, **payload):
    return response(status_code, False, message, **payload)
