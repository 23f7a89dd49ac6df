class Services:
    '''Short service names used when building resource names'''
    SECRET = "secret"
    RDS_PROXY = "rdsproxy"
