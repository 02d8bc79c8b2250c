################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

from pyfilesource.common.options.config_option import ConfigOption
from pyfilesource.common.options.config_options import ConfigOptions


def _credential(key: str, description: str) -> ConfigOption[str]:
    return ConfigOptions.key(key).string_type().no_default_value().with_description(description)


class OssOptions:
    """Credentials and endpoint of the filesystem serving oss:// paths."""

    OSS_ACCESS_KEY_ID = _credential("fs.oss.accessKeyId", "Access key ID used to read oss:// paths")
    OSS_ACCESS_KEY_SECRET = _credential("fs.oss.accessKeySecret", "Access key secret used to read oss:// paths")
    OSS_SECURITY_TOKEN = _credential("fs.oss.securityToken", "Temporary security token for oss:// paths")
    OSS_ENDPOINT = _credential("fs.oss.endpoint", "OSS endpoint, e.g. oss-cn-hangzhou.aliyuncs.com")
    OSS_REGION = _credential("fs.oss.region", "OSS region")


class S3Options:
    """Credentials and endpoint of the filesystem serving s3://, s3a:// and s3n:// paths."""

    S3_ACCESS_KEY_ID = _credential("fs.s3.accessKeyId", "Access key ID used to read s3 paths")
    S3_ACCESS_KEY_SECRET = _credential("fs.s3.accessKeySecret", "Access key secret used to read s3 paths")
    S3_SECURITY_TOKEN = _credential("fs.s3.securityToken", "Temporary session token for s3 paths")
    S3_ENDPOINT = _credential("fs.s3.endpoint", "Endpoint override, e.g. of an S3 compatible store")
    S3_REGION = _credential("fs.s3.region", "S3 region")
