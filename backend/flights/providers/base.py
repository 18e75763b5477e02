class FlightTransport:
    def post(self, path, body):
        """
        Send a search request and return the decoded JSON body.

        Raises NetworkError when no response arrives and ServerError for
        non-success responses.
        """
        raise NotImplementedError
