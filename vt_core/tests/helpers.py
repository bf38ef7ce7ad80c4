# vt_core/tests/helpers.py

def scoped(account_id):
    return {"HTTP_X_ACCOUNT_ID": str(account_id)}
