class Onboarding:
    def __init__(self, client, token: str = None):
        self.client = client
        self.url = "/create-stripe-connect-onboarding"
        self.token = token

    def _headers(self):
        if self.token is None:
            return {}
        return {"Authorization": "Bearer {}".format(self.token)}

    def create_link(self, refresh_url: str = None, return_url: str = None) -> (int, dict):
        json = {}
        if refresh_url is not None:
            json["refresh_url"] = refresh_url
        if return_url is not None:
            json["return_url"] = return_url
        r = self.client.post(self.url, headers=self._headers(), json=json)
        return r.status_code, r.get_json()

    def create_link_raw(self, data: str) -> (int, dict):
        # Sends a body that is not valid JSON
        r = self.client.post(self.url, headers=self._headers(), data=data, content_type="application/json")
        return r.status_code, r.get_json()

    def preflight(self):
        r = self.client.options(self.url)
        return r.status_code, r.headers
