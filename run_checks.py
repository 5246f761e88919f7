from fastapi.testclient import TestClient
from ireporter.main import app

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nREPORTS:')
try:
    resp = client.get('/reports')
    print(resp.status_code)
    print(resp.json())
except Exception as e:
    print('Reports call raised exception:', e)
