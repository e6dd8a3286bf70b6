from io import BytesIO

from image_insight.config.constants import NO_IMAGE_MESSAGE, UPLOAD_ERROR_MESSAGE


def _upload(client, content, filename="photo.jpg"):
    return client.post(
        '/select-image',
        data={'image': (BytesIO(content), filename)},
        content_type='multipart/form-data',
    )


def test_hello_world(client):
    response = client.get('/hello-world')
    assert response.status_code == 200
    assert response.get_json() == "Hello world!"


def test_index_renders_page(client):
    response = client.get('/')
    assert response.status_code == 200
    assert b"Image Analysis App" in response.data
    assert b'accept="image/*"' in response.data


def test_select_image_missing_file(client):
    response = client.post('/select-image', data={})
    assert response.status_code == 400
    assert 'error' in response.get_json()


def test_select_image_publishes_preview(client, make_image):
    content = make_image()
    response = _upload(client, content)
    assert response.status_code == 200

    state = response.get_json()['response']
    assert state['previewUrl'].startswith('/previews/')
    assert state['busy'] is False
    assert state['modalOpen'] is False

    preview = client.get(state['previewUrl'])
    assert preview.status_code == 200
    assert preview.data == content
    assert preview.headers['Content-Type'] == 'image/jpeg'
    assert preview.headers['Cache-Control'] == 'no-cache, no-store, must-revalidate'


def test_select_non_image_is_rejected(client):
    response = _upload(client, b"plain text", filename="notes.txt")
    body = response.get_json()
    assert body['response']['previewUrl'] is None
    assert body['notifications'] == [{'level': 'error', 'message': UPLOAD_ERROR_MESSAGE}]


def test_new_selection_revokes_previous_preview(client, make_image):
    first = _upload(client, make_image(color=(10, 10, 10))).get_json()['response']['previewUrl']
    second = _upload(client, make_image(color=(250, 250, 250))).get_json()['response']['previewUrl']
    assert first != second
    assert client.get(first).status_code == 404
    assert client.get(second).status_code == 200


def test_unknown_preview_is_not_found(client):
    assert client.get('/previews/does-not-exist').status_code == 404


def test_analyze_without_image(client, fake_client):
    response = client.post('/analyze', data={})
    body = response.get_json()
    assert response.status_code == 200
    assert body['notifications'] == [{'level': 'error', 'message': NO_IMAGE_MESSAGE}]
    assert body['response']['busy'] is False
    assert body['response']['modalOpen'] is False
    assert fake_client.calls == []


def test_analyze_returns_result(client, fake_client, make_image):
    _upload(client, make_image())
    response = client.post('/analyze', data={'prompt': 'What colour is this?'})
    state = response.get_json()['response']

    assert state['busy'] is False
    assert state['modalOpen'] is True
    assert state['prompt'] == ''
    assert state['result']['text'] == 'A scenic photo.'
    assert state['result']['prompt'] == 'What colour is this?'
    assert client.get(state['result']['previewUrl']).status_code == 200
    assert fake_client.calls[0][0] == 'What colour is this?'


def test_close_modal(client, make_image):
    _upload(client, make_image())
    client.post('/analyze', data={})
    response = client.post('/close-modal')
    assert response.get_json()['response']['modalOpen'] is False


def test_notifications_are_drained(client):
    client.post('/analyze', data={})
    response = client.get('/state')
    assert response.get_json()['notifications'] == []
