from collections.abc import Iterable
from pathlib import Path
import json
import logging
from functools import wraps

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

from .errors import AuthenticationError, TokenError

logger = logging.getLogger(__name__)

class _GWSAccess():
    """
    Class encapsulating authenticated access to Google Sheets.
    See https://developers.google.com/workspace/guides/create-credentials#choose_the_access_credential_that_is_right_for_you
    for an overview of what you'll need.  Once you've obtained a client secrets file
    (client_secret.json by default) you can refer the object to it for authentication.
    For OAuth it will trigger the confirmation screens once, after that tokens are
    persisted to the cache file (tokencache.json by default) and refreshed from there.
    With neither a cache nor a secrets file, application default credentials
    (GOOGLE_APPLICATION_CREDENTIALS etc) are the last resort.

    It makes no sense to have multiple authenticated sessions per application so do this as a module singleton
    and then its simple to do the service retrieval (which is what most clients are really after) as a decorator.
    """

    __SCOPES = {
        "sheets": "https://www.googleapis.com/auth/spreadsheets",
        "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
        "drive-file": "https://www.googleapis.com/auth/drive.file",
        "drive": "https://www.googleapis.com/auth/drive",
        "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
    }
    __SCOPE_URL_PREFIX = "https://www.googleapis.com/"

    __DEFAULT_SCOPES = ["sheets"]
    __DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize this application: {url}"
    __DEFAULT_AUTH_FLOW_SUCCESS_MSG = "The authentication flow has completed. You may close this window."
    __DEFAULT_SECRETS = Path("client_secret.json")
    __DEFAULT_CACHE = Path("tokencache.json")

    def __init__(self) -> None:
        """
        config and scopes can be specified here but as this is a global singleton
        its more expected to add them later.
        """
        self.reset()

    def __bool__(self) -> bool:
        """True is we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self.__scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @classmethod
    def get_scope(cls, scope: str) -> str:
        """
        Get a scope based on simplified label.
        A raw URL will also be expected.
        """
        s = str(scope)
        sc = cls.__SCOPES.get(s, "")
        if not sc and s.startswith(cls.__SCOPE_URL_PREFIX):
            sc = s
        return sc

    @property
    def client_secrets(self) -> Path:
        """
        Path to client secrets file as provided by Google when generating access credentials.
        """
        return self.__secrets

    @property
    def cred_cache(self) -> Path:
        """
        Path to local credential cache to not have to do full authentication each time.
        """
        return self.__cache

    @property
    def connected(self) -> bool:
        """
        Are we authenticated with Google?
        """
        return bool(self.__creds) and bool(self.__creds.valid)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes authenticated by Google for this session.
        This differs to self.scopes as that is what is requested or to be requested.
        """
        if self.connected:
            return list(self.__creds.scopes or [])
        return []

    @property
    def scopes(self) -> list[str]:
        """
        The scopes requested or to be requested on next authentication sequence.
        """
        return self.__scopes

    @scopes.setter
    def scopes(self, value: None|list[str]|str) -> None:
        """
        Override a new list of session scopes.
        This will trigger a reconnect if the new list contains scopes
        that are not part of the current authenticate list.
        """
        self.__scopes = self._to_scopes(value)
        if self.__scopes and self.connected:
            self.refresh()
        else:
            self.__creds = None
            self.__services = {}

    @classmethod
    def _to_scopes(cls, value: None|list[str]|str) -> list[str]:
        slist = []
        if value is not None:
            vals = [value] if isinstance(value,str) or not isinstance(value,Iterable) else value
            for v in vals:
                s = cls.get_scope(str(v))
                if s and s not in slist:
                    slist.append(s)
                elif not s:
                    logger.warning("ignoring unknown scope %s", v)
        return slist

    @property
    def creds(self) -> Credentials|None:
        """
        Current active access credentials or None
        """
        return self.__creds

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for getting it all at once for pushing into a json, toml, ini, etc, file.
        """
        config = {
            'secrets': str(self.__secrets),
            'cache': str(self.__cache),
            'scopes': list(self.__scopes),
            'server': self.auth_server,
            'port': self.auth_port
        }
        return config

    @config.setter
    def config(self, config: dict) -> None:
        """
        Set configuration state from a dict.
        Convenience method for inserting state pulled from a config file or equivalent.
        """
        reconnect = False
        v = config.get('port', None)
        if v is not None:
            self.auth_port = int(v)
        v = config.get('server', None)
        if v is not None:
            self.auth_server = str(v)
        v = config.get('scopes', [])
        if v:
            self.__scopes = self._to_scopes(v)
            reconnect = True
        v = config.get('cache', None)
        if v is not None:
            self.__cache = Path(v)
            reconnect = True
        v = config.get('secrets', None)
        if v is not None:
            self.__secrets = Path(v)
            reconnect = True
        v = config.get('auth_prompt_msg', None)
        if v is not None:
            self.auth_prompt_msg = str(v)
        v = config.get('flow_success_msg', None)
        if v is not None:
            self.auth_flow_success_msg = str(v)
        if reconnect and self.connected:
            self.connect()

    def reset(self) -> None:
        """
        Reset all connection state to defaults.
        """
        self.__secrets = self.__DEFAULT_SECRETS
        self.__cache = self.__DEFAULT_CACHE
        self.__discovery_cache = gws_discovery_cache.autodetect()
        self.__creds = None
        self.__scopes = self._to_scopes(self.__DEFAULT_SCOPES)
        self.__services = {}
        self.auth_server = 'localhost'
        self.auth_port = 0
        self.auth_prompt_msg = self.__DEFAULT_AUTH_PROMPT_MSG
        self.auth_flow_success_msg = self.__DEFAULT_AUTH_FLOW_SUCCESS_MSG

    def refresh(self) -> bool:
        """
        Check the current scopes and if new requested ones are not present
        in the current session_scopes, refresh the access.
        """
        scopes_accounted = all(s in self.session_scopes for s in self.__scopes)
        if self.connected and not scopes_accounted:
            return self.connect()
        return True

    def _load_cache(self, requested_scopes: list[str]) -> Credentials|None:
        """
        Credentials from the cache file, if there is one and it was
        authorized for all the requested scopes.  A cache for fewer
        scopes is useless so it gets deleted.
        """
        if not (self.__cache.exists() and self.__cache.is_file()):
            return None
        cf = self.__cache.resolve()
        with open(cf, 'r', encoding='utf-8') as f:
            try:
                cached = json.load(f)
            except json.JSONDecodeError:
                logger.warning("credential cache %s is not valid json, removing", cf)
                cached = {}
        if not isinstance(cached, dict):
            logger.warning("credential cache %s is not a json object, removing", cf)
            cached = {}
        scopes = cached.get('scopes', [])
        if not scopes or not all(s in scopes for s in requested_scopes):
            self.__cache.unlink()
            return None
        return Credentials.from_authorized_user_file(str(cf), requested_scopes)

    def _save_cache(self, requested_scopes: list[str]) -> None:
        # scopes isnt needed for a refresh, its to check the cache covers what a caller wants
        user_info = {'refresh_token': self.__creds.refresh_token, 'client_id': self.__creds.client_id,
                     'client_secret': self.__creds.client_secret, 'scopes': requested_scopes}
        with open(self.__cache.resolve(), 'w', encoding='utf-8') as f:
            json.dump(user_info, f, ensure_ascii=False, indent=2)

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        Tries in order: the credential cache (refreshing if expired), the
        OAuth installed app flow from the client secrets file, then
        application default credentials.
        If the user flow succeeds the credentials are saved in the cache file
        to reuse on subsequent invocations.

        raises: AuthenticationError if the secrets file can't be used for the flow,
                TokenError if a cached token couldn't be refreshed and there are no
                secrets to re-authorize with.
        """
        # TODO: Set up for service account key files outside of application default credentials
        self.__creds = None
        self.__services = {}
        if not self.__scopes:
            logger.warning("no scopes requested, not connecting")
            return False
        requested_scopes = list(self.__scopes)
        refresh_error = None
        self.__creds = self._load_cache(requested_scopes)
        if self.__creds and not self.connected:
            if self.__creds.refresh_token:
                try:
                    self.__creds.refresh(Request())
                except google.auth.exceptions.RefreshError as e:
                    logger.warning("failed to refresh stored creds: %s, deleting cred cache and re-authorizing", e)
                    refresh_error = e
            if not self.connected:
                self.__creds = None
                self.__cache.unlink(missing_ok=True)

        if not self.connected:
            if self.__secrets.exists() and self.__secrets.is_file():
                try:
                    flow = InstalledAppFlow.from_client_secrets_file(str(self.__secrets), requested_scopes)
                    self.__creds = flow.run_local_server(host=self.auth_server, port=self.auth_port,
                                                         authorization_prompt_message=self.auth_prompt_msg,
                                                         success_message=self.auth_flow_success_msg)
                except (ValueError, OSError) as e:
                    raise AuthenticationError(f"Failed to authenticate from secrets '{self.__secrets}'. "
                                              f"Try deleting '{self.__cache}' and running again.",
                                              {'error': str(e)}) from e
                if self.connected:
                    self._save_cache(requested_scopes)
            elif refresh_error is not None:
                raise TokenError(f"Stored token could not be refreshed and no client secrets at '{self.__secrets}'",
                                 requested_scopes, {'error': str(refresh_error)}) from refresh_error
            else:
                # final hail mary
                # this will look at the GOOGLE_APPLICATION_CREDENTIALS envvar and
                # other cloud default locations
                try:
                    self.__creds, _ = google.auth.default(scopes=requested_scopes)
                    if not self.__creds.valid:
                        self.__creds.refresh(Request())
                except google.auth.exceptions.DefaultCredentialsError as e:
                    logger.warning("no client secrets at %s and no default credentials: %s", self.__secrets, e)
                    self.__creds = None
                except google.auth.exceptions.RefreshError as e:
                    raise TokenError("Default credentials could not be refreshed",
                                     requested_scopes, {'error': str(e)}) from e
        if self.connected:
            logger.debug("connected with scopes %s", self.session_scopes)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource:
        """
        Build the requested service if not already available, connecting if required.

        raises: AuthenticationError if no connection could be made.
        """
        if not self.connected:
            self.connect()
        if not self.connected:
            raise AuthenticationError("Could not authenticate with Google, no usable credentials",
                                      {'secrets': str(self.__secrets), 'cache': str(self.__cache)})
        id = f'{name}:{version}'
        s = self.__services.get(id, None)
        if s is None:
            s = build(name, version, credentials=self.__creds, cache=self.__discovery_cache)
            self.__services[id] = s
        return s

gws = _GWSAccess()

def service(name: str, version: str):
    """
    Simple decorator to deliver the required service to a function that
    needs access to a GWS service to build a request.
    param: name: service name
    param: version: service version
    """
    def _inner_decorator(f):
        @wraps(f)
        def wrapped(*args,**kwargs):
            if kwargs.get('service') is None:
                kwargs['service'] = gws.get_service(name, version)
            return f(*args, **kwargs)
        return wrapped
    return _inner_decorator
