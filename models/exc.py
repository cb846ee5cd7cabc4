class ConferenceNotFound(Exception):
    pass


class CfpNotFound(Exception):
    pass
